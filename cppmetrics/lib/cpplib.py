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

import re
import sys

# #################################################
# imports from subfolders

from cppmetrics.lib.formula import TRUE, FALSE, Formula, Variable, Conjunction, Disjunction, negate

# #################################################
# external modules

# pyparsing module
import pyparsing as pypa
pypa.ParserElement.enable_packrat()        # speed up parsing
sys.setrecursionlimit(2000)               # handle larger expressions


# #################################################
# rewriting of non-boolean sub-expressions
#
# arithmetic and comparison sub-expressions cannot be expressed as formulas,
# so they are rewritten to a single variable with a csp-like name,
# e.g., 'VERSION >= 3' gets 'VERSION_ge_3'.

__pt = {
    '<': '_lt_',
    '>': '_gt_',
    '<=': '_le_',
    '>=': '_ge_',
    '==': '_eq_',
    '!=': '_ne_',
    '*': '_mu_',
    '/': '_di_',
    '%': '_mo_',
    '+': '_pl_',
    '-': '_mi_',
    '&': '_ba_',
    '|': '_bo_',
    '>>': '_sr_',
    '<<': '_sl_',
}


class _Term(object):
    '''Operand of an arithmetic or comparison expression that has not been
    turned into a formula yet.'''

    NUMBER = 0
    NAME = 1
    EXPRESSION = 2

    def __init__(self, text, kind, value=None):
        self.text = text
        self.kind = kind
        self.value = value

    def toFormula(self):
        if self.kind == _Term.NUMBER:
            return FALSE if self.value == 0 else TRUE
        name = self.text
        if self.kind == _Term.EXPRESSION and name.startswith('(') and name.endswith(')'):
            name = name[1:-1]
        return Variable(name)


def _toFormula(operand):
    if isinstance(operand, Formula):
        return operand
    return operand.toFormula()


def _toText(operand):
    if isinstance(operand, _Term):
        return operand.text
    return str(operand)


# #################################################
# grammar

# possible operands:
#   - hexadecimal number
#   - decimal number
#   - character literal
#   - identifier
#   - macro function call, which is kept as one variable
__numlit = pypa.Opt(pypa.Word('uUlL'))

__hexadec = \
        pypa.Regex('0[xX][0-9a-fA-F]+') + pypa.Suppress(__numlit)
__hexadec.set_parse_action(lambda t: _Term(t[0], _Term.NUMBER, int(t[0], 16)))

__integer = \
        pypa.Regex('[0-9]+') + pypa.Suppress(__numlit)
__integer.set_parse_action(lambda t: _Term(t[0], _Term.NUMBER, int(t[0])))

__string = pypa.QuotedString('\'', '\\')
__string.set_parse_action(lambda t: _Term(t[0], _Term.NAME))

__defined = pypa.Keyword('defined')

__identifier = ~__defined + pypa.Word(pypa.alphas + '_', pypa.alphanums + '_')

__arg = pypa.Word(pypa.alphanums + '_')
__args = pypa.Opt(__arg + pypa.ZeroOrMore(pypa.Literal(',').suppress() + __arg))
__function = pypa.Group(__identifier + pypa.Literal('(').suppress() +
                        __args + pypa.Literal(')').suppress())
__function.set_parse_action(lambda t: _Term(t[0][0] + '(' + ','.join(t[0][1:]) + ')', _Term.NAME))

__name = __identifier.copy()
__name.set_parse_action(lambda t: _Term(t[0], _Term.NAME))


def _rewriteDefined(param):
    _, operand = param[0]
    return Variable(_toText(operand))


def _rewriteNot(param):
    _, operand = param[0]
    return negate(_toFormula(operand))


def _rewriteCalc(param):
    tokens = param[0]
    text = _toText(tokens[0])
    for i in range(1, len(tokens), 2):
        text += __pt[tokens[i]] + _toText(tokens[i + 1])
    return _Term('(' + text + ')', _Term.EXPRESSION)


def _rewriteBinary(connective):
    def _rewrite(param):
        tokens = param[0]
        result = _toFormula(tokens[0])
        for i in range(2, len(tokens), 2):
            result = connective(result, _toFormula(tokens[i]))
        return result
    return _rewrite


__operand = __hexadec | __integer | __string | __function | __name
__calcoperator = pypa.Regex(r'<<|>>|[-+*/%]|&(?!&)|\|(?!\|)')
__compoperator = pypa.Regex(r'<=|>=|==|!=|<|>')

__expression = pypa.infix_notation(__operand, [
    (__defined, 1, pypa.OpAssoc.RIGHT, _rewriteDefined),
    (pypa.Literal('!') + ~pypa.Literal('='), 1, pypa.OpAssoc.RIGHT, _rewriteNot),
    (__calcoperator, 2, pypa.OpAssoc.LEFT, _rewriteCalc),
    (__compoperator, 2, pypa.OpAssoc.LEFT, _rewriteCalc),
    (pypa.Literal('&&'), 2, pypa.OpAssoc.LEFT, _rewriteBinary(Conjunction)),
    (pypa.Literal('||'), 2, pypa.OpAssoc.LEFT, _rewriteBinary(Disjunction)),
]) + pypa.StringEnd()

__comments = re.compile(r'/\*.*?\*/|//[^\n]*', re.DOTALL)


# #################################################
# parsing functions

def parseCondition(expression):
    """This function parses the expression of an #if or #elif directive
    and returns the corresponding formula. If the expression cannot be
    parsed, an error is printed and None is returned."""
    sig = __comments.sub(' ', expression).replace('\\\n', ' ').strip()
    if not sig:
        return None

    try:
        result = __expression.parse_string(sig)[0]
    except pypa.ParseException as e:
        print('ERROR (parse): cannot parse sig (%s) -- (%s)' % (sig, e.col))
        return None
    except RuntimeError:
        print('ERROR (time): cannot parse sig (%s)' % (sig))
        return None
    return _toFormula(result)


def getDirectiveCondition(directive, expression):
    '''Returns the own condition of a conditional directive;
    #else has no condition of its own.'''
    if directive == 'ifdef':
        name = __comments.sub(' ', expression).strip()
        return Variable(name) if name else None
    if directive == 'ifndef':
        name = __comments.sub(' ', expression).strip()
        return negate(Variable(name)) if name else None
    if directive in ['if', 'elif']:
        return parseCondition(expression)
    return None
