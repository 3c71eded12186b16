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

import threading  # for parallelism
from abc import ABCMeta, abstractmethod  # abstract classes
from enum import Enum

# #################################################
# imports from subfolders

from cppmetrics.codemodel import BlockType
from cppmetrics.lib.formula import FormulaVisitor, conjunction, getVariableNames, negate
from cppmetrics.analyses.aggregator import MetricResult
from cppmetrics.analyses.scatteringdegree import SetUpError, normalizeVariableName
from cppmetrics.analyses.variationpoints import VariationPointCounter


##################################################
# settings

class VarType(Enum):
    '''Subset of the variables measured by VariablesPerFunctionMetric.'''
    INTERNAL = 0    # used only inside the function
    EXTERNAL = 1    # part of the function's presence condition
    ALL = 2


class SDType(Enum):
    VARIATION_POINT = 0
    FILE = 1


class BlockMeasureType(Enum):
    BLOCK_AS_ONE = 0               # an #if with its #elif/#else branches is one block
    SEPARATE_PARTIAL_BLOCKS = 1    # each branch is a block of its own


class NDType(Enum):
    VP_ND_MAX = 0
    VP_ND_AVG = 1


class TDType(Enum):
    TD_ALL = 0        # #elif/#else branches include the negated conditions of their siblings
    TD_NO_ELSE = 1    # only conditions as written in the code


# weights of the variable types
__typeweights = {
    'bool': 1,
    'tristate': 2,
    'integer': 10,
    'hex': 10,
    'string': 15,
}


def getTypeWeight(vartype):
    return __typeweights.get(vartype)


##################################################
# abstract metrics

class AbstractMetric(metaclass=ABCMeta):
    '''A metric produces a stream of MetricResults for the given source
    files; getMetricName() names its column in the aggregated table.'''

    @abstractmethod
    def getMetricName(self):
        pass

    @abstractmethod
    def compute(self, sourceFiles):
        pass


def _defaultFileName(sourcefile):
    return sourcefile.path


class AbstractFunctionMetric(AbstractMetric):
    '''Computes one value per function.'''

    def __init__(self, varModel=None, getFileName=None):
        self.varModel = varModel
        self.getFileName = getFileName or _defaultFileName

    def compute(self, sourceFiles):
        for sourcefile in sourceFiles:
            filename = self.getFileName(sourcefile)
            for function in sourcefile.functions:
                yield MetricResult(filename, None, function.lineStart, function.name,
                                   self.computeFunction(function))

    @abstractmethod
    def computeFunction(self, function):
        pass

    def getVariables(self, formula):
        """Returns the distinct variables of the formula in order of
        occurrence. Both spellings of a tristate variable (<name> and
        <name>_MODULE) give <name>; with a variability model, undeclared
        variables are dropped."""
        names = []
        for name in getVariableNames(formula):
            name = normalizeVariableName(name, self.varModel)
            if self.varModel is not None and name not in self.varModel:
                continue
            if name not in names:
                names.append(name)
        return names

    def isVariationPoint(self, block):
        '''A block is a variation point if its presence condition depends
        on at least one variable.'''
        return len(self.getVariables(block.presenceCondition)) > 0


def _walkBranches(blocks):
    """Walks the blocks and their children in pre-order. Yields each
    block with the own conditions of the preceding branches of its
    #if-#elif-#else chain."""
    previous = []
    for block in blocks:
        if block.type == BlockType.IF:
            previous = []
        yield block, list(previous)
        if block.condition is not None:
            previous.append(block.condition)
        for nested in _walkBranches(block.children):
            yield nested


##################################################
# function metrics

class VariablesPerFunctionMetric(AbstractFunctionMetric):
    """Number of variability variables per function.

    EXTERNAL: variables of the presence condition of the function.
    INTERNAL: variables of the conditions of blocks inside the function,
              which are not external.
    ALL:      both.

    If a variability model is given, only declared variables are counted.
    An optional weight strategy maps a variable name to its weight;
    otherwise each variable counts 1.
    """

    def __init__(self, varType, varModel=None, weight=None, getFileName=None):
        AbstractFunctionMetric.__init__(self, varModel, getFileName)
        if not isinstance(varType, VarType):
            raise SetUpError("Unsupported variable type '%s', use one of: %s"
                             % (varType, ", ".join(t.name for t in VarType)))
        self.varType = varType
        self.weight = weight

    def getMetricName(self):
        return self.varType.name + " Vars per Function"

    def externalVars(self, function):
        return self.getVariables(function.presenceCondition)

    def internalVars(self, function):
        external = set(self.externalVars(function))
        internal = []
        for block in function.blocks:
            for name in self.getVariables(block.condition):
                if name not in external and name not in internal:
                    internal.append(name)
        return internal

    def allVars(self, function):
        result = self.externalVars(function)
        result += [n for n in self.internalVars(function) if n not in result]
        return result

    def computeFunction(self, function):
        if self.varType == VarType.INTERNAL:
            variables = self.internalVars(function)
        elif self.varType == VarType.EXTERNAL:
            variables = self.externalVars(function)
        else:
            variables = self.allVars(function)

        if self.weight is None:
            return len(variables)
        return sum(self.weight(name) for name in variables)


class VariationPointsMetric(AbstractFunctionMetric):
    """Number of variation points inside a function; the presence
    condition of the function itself is not counted.

    An #if block is passed to the counter with its presence condition.
    Its #elif and #else branches are passed with the alternative derived
    for the #if, so a whole chain counts as one variation point."""

    def getMetricName(self):
        return "No. of VPs"

    def _addBlocks(self, counter, blocks, parentpc):
        alternative = None
        for block in blocks:
            if block.type == BlockType.IF:
                before = counter.count()
                counter.add(block.presenceCondition)
                if counter.count() > before:
                    alternative = counter.knownAlternatives[-1]
                elif block.condition is not None:
                    alternative = conjunction(parentpc, negate(block.condition))
                else:
                    alternative = None
            else:
                counter.add(alternative)
            self._addBlocks(counter, block.children, block.presenceCondition)

    def computeFunction(self, function):
        counter = VariationPointCounter(function.presenceCondition)
        self._addBlocks(counter, function.children, function.presenceCondition)
        return counter.count()


class VariabilityMcCabeMetric(AbstractFunctionMetric):
    '''Cyclomatic complexity on variation points: 1 + number of #if,
    #ifdef, #ifndef and #elif blocks of the function.'''

    def getMetricName(self):
        return "CC on VPs"

    def computeFunction(self, function):
        return 1 + len([b for b in function.blocks if b.type != BlockType.ELSE])


class BlocksPerFunctionMetric(AbstractFunctionMetric):
    '''Number of variability-dependent blocks inside a function.'''

    def __init__(self, measuredBlocks=BlockMeasureType.BLOCK_AS_ONE, varModel=None, getFileName=None):
        AbstractFunctionMetric.__init__(self, varModel, getFileName)
        if not isinstance(measuredBlocks, BlockMeasureType):
            raise SetUpError("Unsupported block measure type '%s'" % (measuredBlocks,))
        self.measuredBlocks = measuredBlocks

    def getMetricName(self):
        return "No. int. blocks x " + self.measuredBlocks.name

    def computeFunction(self, function):
        blocks = [b for b in function.blocks if self.isVariationPoint(b)]
        if self.measuredBlocks == BlockMeasureType.BLOCK_AS_ONE:
            blocks = [b for b in blocks if b.type == BlockType.IF]
        return len(blocks)


class NestingDepthMetric(AbstractFunctionMetric):
    """Nesting depth of the variation points of a function.

    A variation point inside the function has depth 1, one nested in it
    depth 2, and so on; blocks without variables do not add to the depth.
    VP_ND_MAX gives the deepest point, VP_ND_AVG the average depth of all
    points. Functions without variation points have depth 0."""

    def __init__(self, ndType=NDType.VP_ND_MAX, varModel=None, getFileName=None):
        AbstractFunctionMetric.__init__(self, varModel, getFileName)
        if not isinstance(ndType, NDType):
            raise SetUpError("Unsupported nesting depth type '%s'" % (ndType,))
        self.ndType = ndType

    def getMetricName(self):
        if self.ndType == NDType.VP_ND_AVG:
            return "VP ND_Avg"
        return "VP ND_Max"

    def _collectDepths(self, blocks, depth, depths):
        for block in blocks:
            current = depth
            if self.isVariationPoint(block):
                current += 1
                depths.append(current)
            self._collectDepths(block.children, current, depths)

    def computeFunction(self, function):
        depths = []
        self._collectDepths(function.children, 0, depths)
        if not depths:
            return 0
        if self.ndType == NDType.VP_ND_AVG:
            return float(sum(depths)) / len(depths)
        return max(depths)


class TanglingDegreeMetric(AbstractFunctionMetric):
    """Tangling degree of a function: the sum over all its blocks of the
    number of variables in the block's condition.

    TD_ALL uses the branch condition of #elif and #else blocks, i.e., the
    negated conditions of the preceding branches and the own condition.
    TD_NO_ELSE uses the conditions as written, so #else adds nothing.
    An optional weight strategy maps a variable name to its weight."""

    def __init__(self, tdType=TDType.TD_ALL, varModel=None, weight=None, getFileName=None):
        AbstractFunctionMetric.__init__(self, varModel, getFileName)
        if not isinstance(tdType, TDType):
            raise SetUpError("Unsupported tangling degree type '%s'" % (tdType,))
        self.tdType = tdType
        self.weight = weight

    def getMetricName(self):
        if self.tdType == TDType.TD_NO_ELSE:
            return "Visible-TD"
        return "Full-TD"

    def computeFunction(self, function):
        result = 0
        for block, previous in _walkBranches(function.children):
            if self.tdType == TDType.TD_ALL:
                condition = conjunction(*([negate(c) for c in previous] + [block.condition]))
            else:
                condition = block.condition

            for name in self.getVariables(condition):
                result += 1 if self.weight is None else self.weight(name)
        return result


##################################################
# variable metrics

class VariableTypeMetric(AbstractMetric):
    '''Weight of each variable of the variability model by its type.'''

    def __init__(self, varModel):
        self.varModel = varModel

    def getMetricName(self):
        return "Type Weight"

    def compute(self, sourceFiles=()):
        for var in self.varModel:
            weight = getTypeWeight(var.type)
            if weight is None:
                print("WARNING: unknown type '%s' of variable '%s', using weight 1." % (var.type, var.name))
                weight = 1
            yield MetricResult(None, None, None, var.name, weight)


class ScatteringDegreeMetric(AbstractMetric):
    '''Scattering degree of each variable, counted in #ifdefs or in files.'''

    def __init__(self, container, sdType=SDType.VARIATION_POINT):
        if not isinstance(sdType, SDType):
            raise SetUpError("Unsupported scattering degree type '%s'" % (sdType,))
        self.container = container
        self.sdType = sdType

    def getMetricName(self):
        if self.sdType == SDType.FILE:
            return "File SD"
        return "#ifdef SD"

    def compute(self, sourceFiles=()):
        for degree in self.container:
            if self.sdType == SDType.FILE:
                value = degree.fileCount
            else:
                value = degree.ifdefCount
            yield MetricResult(None, None, None, degree.variable.name, value)


##################################################
# weighted variable count

def weightsFromMetric(metric, sourceFiles=()):
    """This function turns the results of a per-variable metric into a
    mapping from variable name to weight."""
    return dict((result.element, result.value) for result in metric.compute(sourceFiles))


class _WeightSummer(FormulaVisitor):
    def __init__(self, getWeight):
        self.getWeight = getWeight
        self.result = 0.0

    def visitTrue(self, formula):
        pass

    def visitFalse(self, formula):
        pass

    def visitVariable(self, formula):
        self.result += self.getWeight(formula.name)

    def visitNegation(self, formula):
        formula.formula.accept(self)

    def visitConjunction(self, formula):
        formula.left.accept(self)
        formula.right.accept(self)

    def visitDisjunction(self, formula):
        formula.left.accept(self)
        formula.right.accept(self)


class WeightedVariabilityVariableCount(AbstractMetric):
    """Sum of the weights of all variable occurrences in the block
    conditions of a source file.

    weights is either a mapping from variable name to weight or another
    per-variable metric, whose results are used as weights. Variables
    without a weight count 0."""

    def __init__(self, weights, name=None, getFileName=None):
        if isinstance(weights, AbstractMetric):
            if name is None:
                name = "Weighted Vars (" + weights.getMetricName() + ")"
            weights = weightsFromMetric(weights)
        self.weights = weights
        self.name = name or "Weighted Vars"
        self.getFileName = getFileName or _defaultFileName
        self._lock = threading.Lock()
        self._warned = set()

    def getMetricName(self):
        return self.name

    def getWeight(self, variable):
        weight = self.weights.get(variable)
        if weight is None:
            with self._lock:
                if variable not in self._warned:
                    self._warned.add(variable)
                    print("WARNING: returning weight 0 for unknown variable '%s'." % variable)
            return 0.0
        return weight

    def computeFile(self, sourcefile):
        summer = _WeightSummer(self.getWeight)
        for block in sourcefile.iterBlocks():
            if block.condition is not None:
                block.condition.accept(summer)
        return summer.result

    def compute(self, sourceFiles):
        for sourcefile in sourceFiles:
            yield MetricResult(self.getFileName(sourcefile), None, None, None,
                               self.computeFile(sourcefile))
