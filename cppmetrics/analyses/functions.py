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
from cppmetrics.analyses.metrics import BlockMeasureType, NDType, TDType, VarType, BlocksPerFunctionMetric, \
    NestingDepthMetric, TanglingDegreeMetric, VariablesPerFunctionMetric, VariationPointsMetric, \
    VariabilityMcCabeMetric
from cppmetrics.analyses.scatteringdegree import SetUpError


##################################################
# config:
__outputfile = "function_metrics.csv"


def getSetting(enumtype, name):
    '''Returns the member of the given settings enum with the given name.'''
    if isinstance(name, enumtype):
        return name
    try:
        return enumtype[str(name).upper()]
    except KeyError:
        raise SetUpError("Unsupported %s '%s', use one of: %s"
                         % (enumtype.__name__, name, ", ".join(t.name for t in enumtype)))


def getVarType(name):
    '''Returns the VarType of the given name.'''
    return getSetting(VarType, name)


##################################################
def apply(folder, options):
    """This function measures all functions of the srcML files of the
    folder and writes one row per function."""
    sourcefiles = common.readSourceFiles(folder)
    varModel = common.getVariabilityModel(options)
    getFileName = common.getFileNameFunction(folder, options)

    metrics = [
        VariablesPerFunctionMetric(getVarType(options.vartype), varModel, getFileName=getFileName),
        VariationPointsMetric(varModel, getFileName),
        VariabilityMcCabeMetric(varModel, getFileName),
        BlocksPerFunctionMetric(getSetting(BlockMeasureType, options.blocktype), varModel, getFileName),
        NestingDepthMetric(NDType.VP_ND_MAX, varModel, getFileName),
        NestingDepthMetric(NDType.VP_ND_AVG, varModel, getFileName),
        TanglingDegreeMetric(getSetting(TDType, options.tdtype), varModel, getFileName=getFileName),
    ]

    aggregator = MultiMetricAggregator()
    aggregator.collect(metrics, sourcefiles)
    table = aggregator.buildTable()

    writeTable(table, common.getOutputFile(folder, __outputfile))
    print("INFO: measured %d functions." % len(table))
    return table


# ################################################
# add command line options

def addCommandLineOptions(optionparser):
    optionparser.add_argument("--vartype", dest="vartype", default=VarType.ALL.name,
                              choices=[t.name for t in VarType],
                              help="the variables counted per function [default: %(default)s]\n"
                                   "(EXTERNAL=presence condition of the function,\n"
                                   " INTERNAL=conditions inside the function, ALL=both)")
    optionparser.add_argument("--blocktype", dest="blocktype", default=BlockMeasureType.BLOCK_AS_ONE.name,
                              choices=[t.name for t in BlockMeasureType],
                              help="the blocks counted per function [default: %(default)s]\n"
                                   "(BLOCK_AS_ONE=#if with its #elif/#else branches,\n"
                                   " SEPARATE_PARTIAL_BLOCKS=each branch)")
    optionparser.add_argument("--tdtype", dest="tdtype", default=TDType.TD_ALL.name,
                              choices=[t.name for t in TDType],
                              help="the conditions of the tangling degree [default: %(default)s]\n"
                                   "(TD_ALL=#elif/#else with the negated preceding branches,\n"
                                   " TD_NO_ELSE=conditions as written)")


# ################################################
# path of the main output file

def getResultsFile():
    return __outputfile
