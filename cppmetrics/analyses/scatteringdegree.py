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
import threading  # for parallelism
from collections import OrderedDict  # for ordered dictionaries
from concurrent.futures import ThreadPoolExecutor

# #################################################
# imports from subfolders

from cppmetrics.codemodel import VariabilityVariable
from cppmetrics.lib.formula import getVariableNames

# #################################################
# external modules

# numeric python module
import numpy


##################################################
# config:
__headings = ["Variable", "#ifdef Count", "File Count"]

__module_suffix = "_MODULE"


##################################################
# errors

class SetUpError(Exception):
    '''Invalid construction arguments, e.g., a missing setting.'''

    def __init__(self, message):
        Exception.__init__(self, message)
        self.message = message

    def __str__(self):
        return self.message


##################################################
# scattering degree records

class ScatteringDegree(object):
    '''Scattering degree of one variability variable: the number of
    conditional directives (ifdefCount) and the number of distinct files
    (fileCount) referencing the variable.'''

    def __init__(self, variable, ifdefCount=0, fileCount=0):
        self.variable = variable
        self.ifdefCount = ifdefCount
        self.fileCount = fileCount

    def addIfdef(self, count=1):
        self.ifdefCount += count

    def addFile(self):
        self.fileCount += 1

    def getCSVList(self):
        return [self.variable.name, self.ifdefCount, self.fileCount]

    def __repr__(self):
        return "ScatteringDegree(%s, %d, %d)" % (self.variable.name, self.ifdefCount, self.fileCount)


class ScatteringDegreeContainer(object):
    '''Read-only snapshot of the scattering degrees of all variables.
    Iteration is ordered by variable name.'''

    def __init__(self, degrees=()):
        self._degrees = OrderedDict()
        for degree in sorted(degrees, key=lambda d: d.variable.name):
            self._degrees[degree.variable.name] = degree

    def getScatteringDegree(self, name):
        """Returns the record of the variable; variables without any
        occurrence get a record with zero counts."""
        degree = self._degrees.get(name)
        if degree is None:
            return ScatteringDegree(VariabilityVariable(name), 0, 0)
        return degree

    def getSDVariationPoint(self, name):
        return self.getScatteringDegree(name).ifdefCount

    def getSDFile(self, name):
        return self.getScatteringDegree(name).fileCount

    def getSize(self):
        return len(self._degrees)

    def __len__(self):
        return len(self._degrees)

    def __contains__(self, name):
        return name in self._degrees

    def __iter__(self):
        return iter(list(self._degrees.values()))


##################################################
# counting

class CountedVariables(object):
    '''Accumulator for the scattering degrees of a whole scan. Partial
    results are merged once per file.'''

    def __init__(self, varModel=None):
        self._lock = threading.Lock()
        self._degrees = OrderedDict()
        if varModel is not None:
            for var in varModel:
                self._degrees[var.name] = ScatteringDegree(var)

    def addFile(self, fileCounts, varModel=None):
        """Merges the counts of one file: a mapping from variable name to
        the number of directives of that file referencing the variable."""
        with self._lock:
            for name, ifdefs in fileCounts.items():
                degree = self._degrees.get(name)
                if degree is None:
                    var = varModel.getVariable(name) if varModel is not None else None
                    degree = ScatteringDegree(var or VariabilityVariable(name))
                    self._degrees[name] = degree
                degree.addIfdef(ifdefs)
                degree.addFile()

    def getContainer(self):
        with self._lock:
            return ScatteringDegreeContainer(
                ScatteringDegree(d.variable, d.ifdefCount, d.fileCount) for d in self._degrees.values())


def normalizeVariableName(name, varModel=None):
    """This function maps the module spelling of a tristate variable
    (<name>_MODULE) to the variable itself, unless the module spelling
    is declared as a variable of its own."""
    if not name.endswith(__module_suffix) or len(name) == len(__module_suffix):
        return name
    if varModel is not None and name in varModel:
        return name
    return name[:-len(__module_suffix)]


def _countFile(sourcefile, varModel=None):
    '''Counts the directives per variable of one file.'''
    counts = OrderedDict()
    for block in sourcefile.iterBlocks():
        names = set()
        for name in getVariableNames(block.condition):
            name = normalizeVariableName(name, varModel)
            if name in names:
                continue
            names.add(name)
            counts[name] = counts.get(name, 0) + 1
    return counts


class VariabilityCounter(object):
    '''Counts the scattering degrees of all variables over a set of source
    files. Variables not declared in the variability model are counted as
    well.'''

    def __init__(self, threads=1):
        self.threads = max(1, threads)

    def count(self, sourceFiles, varModel=None):
        accumulator = CountedVariables(varModel)

        def _countAndMerge(sourcefile):
            accumulator.addFile(_countFile(sourcefile, varModel), varModel)

        if self.threads == 1:
            for sourcefile in sourceFiles:
                _countAndMerge(sourcefile)
        else:
            with ThreadPoolExecutor(max_workers=self.threads) as executor:
                for future in [executor.submit(_countAndMerge, f) for f in sourceFiles]:
                    future.result()

        return accumulator.getContainer()


##################################################
# statistics

def getScatteringStatistics(container):
    """This function returns mean and standard deviation of the #ifdef
    and the file scattering degrees:
    ((ifdef mean, ifdef std), (file mean, file std))."""
    ifdefs = numpy.array([d.ifdefCount for d in container], dtype=float)
    files = numpy.array([d.fileCount for d in container], dtype=float)

    def _stats(values):
        if len(values) == 0:
            return (0.0, 0.0)
        if len(values) == 1:
            return (float(values[0]), 0.0)
        return (float(numpy.mean(values)), float(numpy.std(values, ddof=1)))

    return (_stats(ifdefs), _stats(files))


##################################################
# persistence

def readScatteringDegrees(path, varModel=None):
    """This function reads previously computed scattering degrees from the
    given cache file. Rows of variables not declared in the variability
    model are skipped; malformed rows are reported and skipped."""
    if not path:
        raise SetUpError("No scattering degree cache file given!")

    degrees = []
    with open(path, 'r', newline='') as fd:
        lines = fd.read().splitlines()

    # skip the separator hint and the header
    if lines and lines[0].startswith("sep="):
        lines = lines[1:]
    if not lines:
        return ScatteringDegreeContainer()
    delimiter = ';' if ';' in lines[0] else ','

    for lineno, row in enumerate(csv.reader(lines[1:], delimiter=delimiter), start=2):
        if not row:
            continue
        if len(row) < 3:
            print("ERROR: malformed scattering degree in line %d of '%s': %s" % (lineno, path, row))
            continue

        name = row[0].strip()
        if varModel is not None:
            var = varModel.getVariable(name)
            if var is None:
                continue
        else:
            var = VariabilityVariable(name)

        try:
            degrees.append(ScatteringDegree(var, int(row[1]), int(row[2])))
        except ValueError:
            print("ERROR: malformed scattering degree in line %d of '%s': %s" % (lineno, path, row))

    return ScatteringDegreeContainer(degrees)


def writeScatteringDegrees(path, container):
    '''Writes the scattering degrees to the given file, overwriting it.
    Returns the container for further use.'''
    with open(path, 'w', newline='') as fd:
        fdcsv = csv.writer(fd, delimiter=';', lineterminator='\n')
        fdcsv.writerow(__headings)
        for degree in container:
            fdcsv.writerow(degree.getCSVList())
    return container
