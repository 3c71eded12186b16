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
from collections import namedtuple, OrderedDict


##################################################
# config:
_headings_source = "Source File"
_headings_include = "Included File"
_headings_line = "Line No."
_headings_element = "Element"


##################################################
# result types

# one value of one metric at one code location
MetricResult = namedtuple('MetricResult', ['sourceFile', 'includedFile', 'lineNo', 'element', 'value'])


class MetricContext(namedtuple('MetricContext', ['sourceFile', 'includedFile', 'lineNo', 'element'])):
    '''Location key of a metric value. An absent part (None) sorts before
    any given value, e.g., a missing included file before ''.'''

    __slots__ = ()

    def sortKey(self):
        return tuple((part is not None, part if part is not None else '') for part in self)


class MultiMetricResult(object):
    '''One row of the aggregated table: a location and one value per
    metric column; None marks a missing value.'''

    def __init__(self, context, values, withIncludedFile):
        self.context = context
        self.values = values
        self._withIncludedFile = withIncludedFile

    def getContent(self):
        content = [self.context.sourceFile]
        if self._withIncludedFile:
            content.append(self.context.includedFile)
        content += [self.context.lineNo, self.context.element]
        return content + list(self.values)


class MetricTable(object):
    def __init__(self, header, rows):
        self.header = header
        self.rows = rows

    def __len__(self):
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)


##################################################
# aggregation

class MultiMetricAggregator(object):
    """Merges the result streams of several metrics into one sparse
    table with one row per code location and one column per metric.

    addValue() may be called from several threads; buildTable() must
    only be called after all values are added."""

    def __init__(self):
        self._lock = threading.Lock()
        self._values = OrderedDict()    # context -> {metric name -> value}
        self._metrics = []              # metric names in first-seen order

    def addValue(self, sourceFile, includedFile, lineNo, element, metricName, value):
        context = MetricContext(sourceFile, includedFile, lineNo, element)
        with self._lock:
            if metricName not in self._metrics:
                self._metrics.append(metricName)

            row = self._values.setdefault(context, {})
            if metricName in row:
                print("WARNING: value of metric '%s' at %s:%s (%s) added twice, keeping the last one."
                      % (metricName, sourceFile, lineNo, element))
            row[metricName] = value

    def addResult(self, metricName, result):
        self.addValue(result.sourceFile, result.includedFile, result.lineNo,
                      result.element, metricName, result.value)

    def addResults(self, metricName, results):
        """Adds all results of one metric."""
        for result in results:
            self.addResult(metricName, result)

    def collect(self, metrics, *args):
        """Runs the given metrics, one thread each, and adds their results.
        Each metric is called as metric.compute(*args)."""
        errors = []

        # columns in the order of the given metrics, not of their threads
        with self._lock:
            for metric in metrics:
                if metric.getMetricName() not in self._metrics:
                    self._metrics.append(metric.getMetricName())

        def _run(metric):
            try:
                self.addResults(metric.getMetricName(), metric.compute(*args))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=_run, args=(metric,)) for metric in metrics]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        if errors:
            raise errors[0]

    def getMetricNames(self):
        return list(self._metrics)

    def buildTable(self):
        """Builds the sorted table of all locations."""
        with self._lock:
            contexts = sorted(self._values.keys(), key=MetricContext.sortKey)
            withIncludedFile = any(c.includedFile is not None for c in contexts)

            header = [_headings_source]
            if withIncludedFile:
                header.append(_headings_include)
            header += [_headings_line, _headings_element] + self._metrics

            rows = []
            for context in contexts:
                row = self._values[context]
                values = [row.get(metric) for metric in self._metrics]
                rows.append(MultiMetricResult(context, values, withIncludedFile))

        return MetricTable(header, rows)


##################################################
# output

def _formatCell(value):
    if value is None:
        return ''
    if isinstance(value, (int, float)):
        return repr(float(value))
    return str(value)


def _formatLocation(value):
    if value is None:
        return ''
    return str(value)


def writeTable(table, out):
    """Writes the table as semicolon-separated values to the given path
    or stream. Metric values are written as decimals (2 gets 2.0),
    missing values as empty cells."""
    if isinstance(out, str):
        with open(out, 'w', newline='') as fd:
            writeTable(table, fd)
        return

    fdcsv = csv.writer(out, delimiter=';', lineterminator='\n')
    fdcsv.writerow(table.header)
    for row in table:
        content = row.getContent()
        nlocations = len(content) - len(row.values)
        fdcsv.writerow([_formatLocation(c) for c in content[:nlocations]] +
                       [_formatCell(v) for v in content[nlocations:]])
