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

import sys
from argparse import ArgumentParser, RawTextHelpFormatter  # for parameters to this script

# #################################################
# imports from subfolders

import cppmetrics
from cppmetrics.analyses.common import FILENAME_SRCML, FILENAME_SOURCE


# #################################################
# global constants

__inputlist_default = "cppmetrics_input.txt"


# #################################################
# construct ArgumentParser

def getParser(kinds):
    """
    Constructs the parser needed for cppmetrics. Includes the options of
    all analysis kinds.

    :arg kinds : the ordered mapping of analysis kinds
    :rtype : the argument parser
    """

    parser = ArgumentParser(formatter_class=RawTextHelpFormatter)

    # version
    parser.add_argument('--version', action='version', version=cppmetrics.version())


    # ADD KIND ARGUMENT

    # kinds
    kindnames = list(kinds.keys())
    kindgroup = parser.add_mutually_exclusive_group(required=False)
    kindgroup.add_argument("--kind", choices=kindnames, dest="kind",
                           default=kindnames[0], metavar="<K>",
                           help="the analysis to be performed [default: %(default)s]")
    kindgroup.add_argument("-a", "--all", action="store_true", dest="allkinds", default=False,
                           help="perform all available kinds of analysis [default: %(default)s]")


    # ADD INPUT TYPE (list or file)

    # input 1
    inputgroup = parser.add_mutually_exclusive_group(required=False)
    inputgroup.add_argument("--list", type=str, dest="inputlist", metavar="LIST",
                            nargs="?", default=__inputlist_default, const=__inputlist_default,
                            help="a file that contains the list of input projects/folders [default: %(default)s]")
    # input 2
    inputgroup.add_argument("--file", type=str, dest="inputfile", nargs=2, metavar=("IN", "OUT"),
                            help="a srcML file IN that is analyzed, the analysis results are written to OUT"
                                 "\n(--list is the default)")


    # ADD GENERAL ARGUMENTS

    parser.add_argument("--varmodel", type=str, dest="varmodel", metavar="FILE", default=None,
                        help="a CSV file with the columns 'Variable' and 'Type' describing\n"
                             "the variability model [default: %(default)s]")
    parser.add_argument("--threads", type=int, dest="threads", default=1,
                        help="number of threads used to count scattering degrees [default: %(default)s]")
    parser.add_argument("--filenames", type=int, choices=[FILENAME_SRCML, FILENAME_SOURCE], dest="filenames",
                        default=FILENAME_SRCML,
                        help="determines the file paths to print [default: %(default)s]\n"
                             "(0=paths to srcML files, 1=paths to source files)")
    parser.add_argument("--filenamesRelative", action="store_true", dest="filenamesRelative", default=False,
                        help="print relative file names [default: %(default)s]\n"
                             "e.g., '/projects/apache/_cppmetrics/afile.c.xml' gets 'afile.c.xml'.")


    # ADD POSSIBLE ANALYSIS KINDS AND THEIR COMMAND-LINE ARGUMENTS

    parser.add_argument_group("Possible Kinds of Analyses <K>".upper(), ", ".join(kindnames))

    # add options for each analysis kind
    for cls in kinds.values():
        cls.addCommandLineOptions(parser)

    return parser


def getOptions(kinds, args=None):
    """
    Parses the command line. Includes following procedure:
      * parsing
      * checking of constraints

    :arg kinds : the ordered mapping of analysis kinds
    :arg args : the arguments to parse [default: sys.argv]
    :rtype : the resulting options
    """

    parser = getParser(kinds)

    # PARSE OPTIONS

    options = parser.parse_args(args)


    # CHECK CONSTRAINTS ON OPTIONS

    checkConstraints(options)


    # RETURN

    return options


def checkConstraints(options):
    # constraints
    if (options.allkinds == True and options.inputfile):
        print("Using all kinds of analysis for a single input and output file is weird!")
        sys.exit(1)

    if (options.threads < 1):
        print("ERROR: the number of threads must be positive!")
        sys.exit(1)
