# -*- coding: utf-8 -*-
# cppmetrics is a suite of metrics for measuring C preprocessor-based
# variability in software product lines.
# Copyright (C) 2014-2015 University of Passau, Germany
#
# This program is free software: you can redistribute it and/or modify it
# under the terms of the GNU Lesser General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with this program.  If not, see
# <http://www.gnu.org/licenses/>.
#
# Contributors:
#     Claus Hunsen <hunsen@fim.uni-passau.de>
#     Andreas Ringlstetter <andreas.ringlstetter@gmail.com>



# #################################################
# imports from the std-library

import os
import sys

# #################################################
# imports from subfolders

from cppmetrics import cli, analysis
from cppmetrics.analyses.scatteringdegree import SetUpError


# #################################################
# main method

def main(args=None):
    kinds = analysis.getKinds()

    # #################################################
    # options parsing

    options = cli.getOptions(kinds, args)

    # #################################################
    # main

    try:
        if (options.inputfile):

            # split --file argument
            options.infile = os.path.normpath(os.path.abspath(options.inputfile[0]))  # IN
            options.outfile = os.path.normpath(os.path.abspath(options.inputfile[1]))  # OUT

            # check if inputfile exists
            if (not os.path.isfile(options.infile)):
                print("ERROR: input file '{}' cannot be found!".format(options.infile))
                sys.exit(1)

            analysis.applyFile(options.kind, options.infile, options)

        elif (options.inputlist):
            # handle --list argument
            options.inputlist = os.path.normpath(os.path.abspath(options.inputlist))  # LIST

            # check if list file exists
            if (not os.path.isfile(options.inputlist)):
                print("ERROR: input file '{}' cannot be found!".format(options.inputlist))
                sys.exit(1)

            if (options.allkinds):
                analysis.applyFoldersAll(options.inputlist, options)
            else:
                analysis.applyFolders(options.kind, options.inputlist, options)

        else:
            print("This should not happen! No input file or list of projects given!")
            sys.exit(1)

    except SetUpError as e:
        print("ERROR: {}".format(e))
        sys.exit(1)


if __name__ == '__main__':
    main()
