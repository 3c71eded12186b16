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

import csv
import os
import re
from collections import OrderedDict  # for ordered dictionaries
from enum import Enum

# #################################################
# imports from subfolders

from cppmetrics.lib.formula import TRUE, conjunction, negate
from cppmetrics.lib.cpplib import getDirectiveCondition

# #################################################
# external modules

# python-lxml module
from lxml import etree


##################################################
# constants:

# namespace-constants of srcml
__cppnscpp = ['http://www.srcML.org/srcML/cpp', 'http://www.sdml.info/srcML/cpp']
__cppnsdef = ['http://www.srcML.org/srcML/src', 'http://www.sdml.info/srcML/src']
__cppnspos = 'http://www.srcML.org/srcML/position'
__cpprens = re.compile('{(.+)}(.+)')

# conditionals in the code
__conditionals = ['if', 'ifdef', 'ifndef']
__conditionals_elif = ['elif']
__conditionals_else = ['else']
__conditionals_endif = ['endif']
__conditionals_all = __conditionals + __conditionals_elif + \
        __conditionals_else + __conditionals_endif

# functions in the code
__functions = ['function', 'constructor', 'destructor']


##################################################
# errors

class IfdefEndifMismatchError(Exception):
    def __init__(self, line=None):
        self.line = line

    def __str__(self):
        if self.line is None:
            return ("Ifdef and endif do not match!")
        return ("Ifdef and endif do not match! (line %s)" % self.line)


##################################################
# variability model

class VariabilityVariable(object):
    '''A variable of the variability model with its declared type
    (bool, tristate, integer, hex, string, or unknown).'''

    def __init__(self, name, type='unknown'):
        self.name = name
        self.type = type

    def __eq__(self, other):
        return isinstance(other, VariabilityVariable) and \
               self.name == other.name and self.type == other.type

    def __hash__(self):
        return hash((self.name, self.type))

    def __repr__(self):
        return "VariabilityVariable(%s, %s)" % (self.name, self.type)


class VariabilityModel(object):
    def __init__(self, variables=()):
        self._variables = OrderedDict()
        for var in variables:
            self._variables[var.name] = var

    def getVariable(self, name):
        return self._variables.get(name)

    def __contains__(self, name):
        return name in self._variables

    def __iter__(self):
        return iter(self._variables.values())

    def __len__(self):
        return len(self._variables)


def readVariabilityModel(path):
    """This function reads a variability model from a CSV file with the
    columns 'Variable' and 'Type'. Lines starting with '#' are skipped."""
    variables = []
    with open(path, 'r', newline='') as fd:
        lines = [line for line in fd if line.strip() and not line.startswith('#')]

    if not lines:
        return VariabilityModel()

    delimiter = ';' if ';' in lines[0] else ','
    for row in csv.reader(lines[1:], delimiter=delimiter):
        if not row or not row[0].strip():
            continue
        vartype = row[1].strip() if len(row) > 1 and row[1].strip() else 'unknown'
        variables.append(VariabilityVariable(row[0].strip(), vartype))
    return VariabilityModel(variables)


##################################################
# code model

class BlockType(Enum):
    IF = 0
    ELSEIF = 1
    ELSE = 2


class CppBlock(object):
    '''A conditionally compiled block, from its directive up to the next
    #elif, #else, or #endif on the same level.

    condition is the expression of the block's own directive (None for
    #else); presenceCondition is the full condition under which the
    block is compiled, including all surrounding blocks and the negated
    conditions of preceding sibling branches.'''

    def __init__(self, condition, presenceCondition, type, lineStart):
        self.condition = condition
        self.presenceCondition = presenceCondition
        self.type = type
        self.lineStart = lineStart
        self.lineEnd = lineStart
        self.children = []

    def iterateNestedElements(self):
        return iter(self.children)

    def __repr__(self):
        return "CppBlock(%s, line %d, %s)" % (self.type.name, self.lineStart, self.presenceCondition)


class CodeFunction(object):
    def __init__(self, name, lineStart, presenceCondition=TRUE):
        self.name = name
        self.lineStart = lineStart
        self.lineEnd = lineStart
        self.presenceCondition = presenceCondition
        self.children = []    # outermost blocks opened inside the function
        self.blocks = []      # all blocks opened inside the function, in pre-order

    def iterateNestedElements(self):
        return iter(self.children)

    def __repr__(self):
        return "CodeFunction(%s, line %d)" % (self.name, self.lineStart)


class SourceFile(object):
    def __init__(self, path, sourcePath=None):
        self.path = path
        self.sourcePath = sourcePath or path
        self.blocks = []
        self.functions = []

    def iterateNestedElements(self):
        return iter(self.blocks)

    def iterBlocks(self):
        """Walks all blocks of the file in pre-order."""
        stack = list(reversed(self.blocks))
        while stack:
            block = stack.pop()
            yield block
            stack.extend(reversed(block.children))


##################################################
# helper functions

def returnFileNames(folder, extfilt = ['.xml']):
    '''This function returns all files of the input folder <folder>
    and its subfolders.'''
    filesfound = list()

    if os.path.isdir(folder):
        for currentfolder, folders, files in os.walk(os.path.abspath(folder)):
            folders.sort()
            for n in sorted(files):
                if os.path.splitext(n)[1] in extfilt:
                    filesfound.append(os.path.join(currentfolder, n))

    return filesfound


def _getMacroSignature(ifdefnode):
    """This function gets the signature of an ifdef or corresponding macro
    out of the xml-element and its descendants. Since the macros are held
    inside the xml-representation in an own namespace, all descendants
    and their text corresponds to the macro-signature.
    """
    # get either the expr or the name tag,
    # which is always the second descendant
    nexpr = [itex for itex in ifdefnode.iterdescendants()]
    if (len(nexpr) == 0):
        return ''
    if (len(nexpr) == 1):
        return nexpr[0].tail or ''
    return ''.join([token for token in nexpr[1].itertext()])


def _getLine(elem, root):
    pos = elem.get('{' + __cppnspos + '}start')
    if pos:
        return int(pos.split(':')[0])
    return elem.sourceline - root.sourceline + 1


def _getFunctionName(elem):
    for child in elem:
        if not isinstance(child.tag, str):
            continue
        ns, tag = __cpprens.match(child.tag).groups()
        if tag == 'name' and ns in __cppnsdef:
            return ''.join(child.itertext()).strip()
    return ''


##################################################
# srcML reader

def parseSrcML(root, path, sourcePath=None):
    """This function builds the code model of one source file out of its
    srcML representation. Conditional blocks are nested as in the source;
    functions keep track of the blocks opened within their bodies."""
    sourcefile = SourceFile(path, sourcePath)

    blockstack = []        # open branches: (block, conditions of previous siblings, function)
    functionstack = []     # open functions

    def _openBlock(directive, elem, type, previous):
        line = _getLine(elem, root)
        condition = getDirectiveCondition(directive, _getMacroSignature(elem))
        parent = blockstack[-1][0] if blockstack else None
        parentpc = parent.presenceCondition if parent else TRUE

        negated = [negate(c) for c in previous if c is not None]
        pc = conjunction(parentpc, *(negated + [condition]))
        block = CppBlock(condition, pc, type, line)

        if parent:
            parent.children.append(block)
        else:
            sourcefile.blocks.append(block)

        function = functionstack[-1] if functionstack else None
        if function:
            function.blocks.append(block)
            if not blockstack or blockstack[-1][2] is not function:
                function.children.append(block)

        blockstack.append((block, previous + [condition], function))

    def _closeBlock(elem):
        if not blockstack:
            raise IfdefEndifMismatchError(_getLine(elem, root))
        block, previous, _ = blockstack.pop()
        block.lineEnd = _getLine(elem, root)
        return previous

    # iterate over all tags separately <start>- and <end>-tag
    for event, elem in etree.iterwalk(root, events=("start", "end")):
        if not isinstance(elem.tag, str):
            continue
        ns, tag = __cpprens.match(elem.tag).groups()

        # functions
        if ((tag in __functions) and (ns in __cppnsdef)):
            if (event == 'start'):
                pc = blockstack[-1][0].presenceCondition if blockstack else TRUE
                function = CodeFunction(_getFunctionName(elem), _getLine(elem, root), pc)
                sourcefile.functions.append(function)
                functionstack.append(function)
            else:
                function = functionstack.pop()
                text = etree.tostring(elem, method='text', encoding='unicode', with_tail=False)
                function.lineEnd = function.lineStart + text.count('\n')
            continue

        # conditionals; handled when the directive itself is complete
        if ((tag not in __conditionals_all)
                or (event != 'end')
                or (ns not in __cppnscpp)):
            continue

        if (tag in __conditionals):
            _openBlock(tag, elem, BlockType.IF, [])
        elif (tag in __conditionals_elif):
            previous = _closeBlock(elem)
            _openBlock(tag, elem, BlockType.ELSEIF, previous)
        elif (tag in __conditionals_else):
            previous = _closeBlock(elem)
            _openBlock(tag, elem, BlockType.ELSE, previous)
        elif (tag in __conditionals_endif):
            _closeBlock(elem)

    if (blockstack):
        raise IfdefEndifMismatchError(blockstack[-1][0].lineStart)
    return sourcefile


def readSrcML(path):
    '''Reads one srcML file. Raises lxml.etree.XMLSyntaxError for broken
    XML and IfdefEndifMismatchError for unbalanced conditionals.'''
    tree = etree.parse(path)
    root = tree.getroot()
    sourcePath = root.get('filename')
    if not sourcePath and path.endswith('.xml'):
        sourcePath = path[:-len('.xml')]
    return parseSrcML(root, path, sourcePath)
