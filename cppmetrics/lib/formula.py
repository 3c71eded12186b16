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

from abc import ABCMeta, abstractmethod  # abstract classes


# #################################################
# formula variants
#
# Presence conditions are immutable trees over the connectives below.
# Equality is structural: same variant, same operands, same operand order.

class Formula(metaclass=ABCMeta):
    '''Base class of all presence-condition formulas.'''

    __slots__ = ()

    @abstractmethod
    def accept(self, visitor):
        pass

    def _key(self):
        return ()

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash((type(self).__name__,) + self._key())

    def __repr__(self):
        return type(self).__name__ + "(" + str(self) + ")"

    def __setattr__(self, name, value):
        raise AttributeError("formulas are immutable")


class True_(Formula):
    __slots__ = ()

    def accept(self, visitor):
        return visitor.visitTrue(self)

    def __str__(self):
        return "1"


class False_(Formula):
    __slots__ = ()

    def accept(self, visitor):
        return visitor.visitFalse(self)

    def __str__(self):
        return "0"


TRUE = True_()
FALSE = False_()


class Variable(Formula):
    __slots__ = ('name',)

    def __init__(self, name):
        object.__setattr__(self, 'name', name)

    def accept(self, visitor):
        return visitor.visitVariable(self)

    def _key(self):
        return (self.name,)

    def __str__(self):
        return self.name


class Negation(Formula):
    __slots__ = ('formula',)

    def __init__(self, formula):
        object.__setattr__(self, 'formula', formula)

    def accept(self, visitor):
        return visitor.visitNegation(self)

    def _key(self):
        return (self.formula,)

    def __str__(self):
        if isinstance(self.formula, (Variable, True_, False_, Negation)):
            return "!" + str(self.formula)
        return "!(" + str(self.formula) + ")"


class _BinaryFormula(Formula):
    __slots__ = ('left', 'right')
    _operator = None

    def __init__(self, left, right):
        object.__setattr__(self, 'left', left)
        object.__setattr__(self, 'right', right)

    def _key(self):
        return (self.left, self.right)

    def _operandString(self, operand):
        if isinstance(operand, _BinaryFormula) and type(operand) is not type(self):
            return "(" + str(operand) + ")"
        return str(operand)

    def __str__(self):
        return self._operandString(self.left) + " " + self._operator + " " + \
               self._operandString(self.right)


class Conjunction(_BinaryFormula):
    __slots__ = ()
    _operator = "&&"

    def accept(self, visitor):
        return visitor.visitConjunction(self)


class Disjunction(_BinaryFormula):
    __slots__ = ()
    _operator = "||"

    def accept(self, visitor):
        return visitor.visitDisjunction(self)


# #################################################
# visitors

class FormulaVisitor(metaclass=ABCMeta):
    '''Exhaustive visitor over all formula variants.

    A concrete visitor cannot be instantiated unless it handles every
    variant, so adding a variant forces all visitors to be revisited.
    '''

    def visit(self, formula):
        return formula.accept(self)

    @abstractmethod
    def visitTrue(self, formula):
        pass

    @abstractmethod
    def visitFalse(self, formula):
        pass

    @abstractmethod
    def visitVariable(self, formula):
        pass

    @abstractmethod
    def visitNegation(self, formula):
        pass

    @abstractmethod
    def visitConjunction(self, formula):
        pass

    @abstractmethod
    def visitDisjunction(self, formula):
        pass


class VariableFinder(FormulaVisitor):
    '''Collects the names of all variables of a formula in first-seen order.
    Every occurrence is kept in `occurrences`, the distinct names in `names`.'''

    def __init__(self):
        self.names = []
        self.occurrences = []
        self._seen = set()

    def visitTrue(self, formula):
        pass

    def visitFalse(self, formula):
        pass

    def visitVariable(self, formula):
        self.occurrences.append(formula.name)
        if formula.name not in self._seen:
            self._seen.add(formula.name)
            self.names.append(formula.name)

    def visitNegation(self, formula):
        formula.formula.accept(self)

    def visitConjunction(self, formula):
        formula.left.accept(self)
        formula.right.accept(self)

    def visitDisjunction(self, formula):
        formula.left.accept(self)
        formula.right.accept(self)


# #################################################
# helper functions

def getVariableNames(formula):
    """This function returns the distinct variable names of the formula."""
    if formula is None:
        return []
    finder = VariableFinder()
    formula.accept(finder)
    return finder.names


def negate(formula):
    """Negates the formula; an existing negation is unwrapped instead of
    being negated twice."""
    if isinstance(formula, Negation):
        return formula.formula
    return Negation(formula)


def conjunction(*formulas):
    """Left-nested conjunction of the given formulas, skipping TRUE and None.
    Returns TRUE if nothing is left."""
    result = None
    for f in formulas:
        if f is None or f == TRUE:
            continue
        if result is None:
            result = f
        else:
            result = Conjunction(result, f)
    if result is None:
        return TRUE
    return result
