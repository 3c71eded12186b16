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
# imports from subfolders

from cppmetrics.analyses import common
from cppmetrics.analyses.scatteringdegree import VariabilityCounter, getScatteringStatistics, \
    writeScatteringDegrees


##################################################
# config:
__outputfile = "scattering_degrees.csv"


##################################################
def apply(folder, options):
    """This function counts the scattering degrees of all variability
    variables in the srcML files of the folder and writes them to the
    results file and, if given, to the scattering degree cache."""
    sourcefiles = common.readSourceFiles(folder)
    varModel = common.getVariabilityModel(options)

    container = VariabilityCounter(options.threads).count(sourcefiles, varModel)

    writeScatteringDegrees(common.getOutputFile(folder, __outputfile), container)
    if options.sdcache:
        print("INFO: writing scattering degrees to cache (%s)." % options.sdcache)
        writeScatteringDegrees(options.sdcache, container)

    ((ifdefmean, ifdefstd), (filemean, filestd)) = getScatteringStatistics(container)
    print("INFO: %d variables, #ifdef scattering degree: mean %.2f, std %.2f; "
          "file scattering degree: mean %.2f, std %.2f."
          % (len(container), ifdefmean, ifdefstd, filemean, filestd))
    return container


# ################################################
# add command line options

def addCommandLineOptions(optionparser):
    optionparser.add_argument("--sdcache", dest="sdcache", metavar="FILE", default=None,
                              help="scattering degree cache; written by this analysis, read by the\n"
                                   "analyses 'variables' and 'files' [default: %(default)s]")


# ################################################
# path of the main output file

def getResultsFile():
    return __outputfile
