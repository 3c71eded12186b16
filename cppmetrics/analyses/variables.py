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

# #################################################
# imports from subfolders

from cppmetrics.analyses import common
from cppmetrics.analyses.aggregator import MultiMetricAggregator, writeTable
from cppmetrics.analyses.metrics import SDType, ScatteringDegreeMetric, VariableTypeMetric


##################################################
# config:
__outputfile = "variable_metrics.csv"


##################################################
def apply(folder, options):
    """This function writes one row per variability variable: its
    scattering degrees and, if a variability model is given, its type
    weight."""
    varModel = common.getVariabilityModel(options)
    if options.sdcache and os.path.isfile(options.sdcache):
        sourcefiles = []
    else:
        sourcefiles = common.readSourceFiles(folder)
    container = common.getScatteringDegrees(sourcefiles, varModel, options)

    metrics = [
        ScatteringDegreeMetric(container, SDType.VARIATION_POINT),
        ScatteringDegreeMetric(container, SDType.FILE),
    ]
    if varModel is not None:
        metrics.append(VariableTypeMetric(varModel))

    aggregator = MultiMetricAggregator()
    aggregator.collect(metrics, sourcefiles)
    table = aggregator.buildTable()

    writeTable(table, common.getOutputFile(folder, __outputfile))
    print("INFO: measured %d variables." % len(table))
    return table


# ################################################
# add command line options

def addCommandLineOptions(optionparser):
    pass


# ################################################
# path of the main output file

def getResultsFile():
    return __outputfile
