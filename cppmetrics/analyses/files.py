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
from cppmetrics.analyses.aggregator import MultiMetricAggregator, writeTable
from cppmetrics.analyses.metrics import SDType, ScatteringDegreeMetric, VariableTypeMetric, \
    WeightedVariabilityVariableCount


##################################################
# config:
__outputfile = "file_metrics.csv"


##################################################
def apply(folder, options):
    """This function writes one row per source file: the sum of the
    weights of all variables used in its conditions, weighted by the
    #ifdef scattering degree and, if a variability model is given, by
    the variable type."""
    sourcefiles = common.readSourceFiles(folder)
    varModel = common.getVariabilityModel(options)
    getFileName = common.getFileNameFunction(folder, options)
    container = common.getScatteringDegrees(sourcefiles, varModel, options)

    weights = [ScatteringDegreeMetric(container, SDType.VARIATION_POINT)]
    if varModel is not None:
        weights.append(VariableTypeMetric(varModel))
    metrics = [WeightedVariabilityVariableCount(w, getFileName=getFileName) for w in weights]

    aggregator = MultiMetricAggregator()
    aggregator.collect(metrics, sourcefiles)
    table = aggregator.buildTable()

    writeTable(table, common.getOutputFile(folder, __outputfile))
    print("INFO: measured %d files." % len(table))
    return table


# ################################################
# add command line options

def addCommandLineOptions(optionparser):
    pass


# ################################################
# path of the main output file

def getResultsFile():
    return __outputfile
