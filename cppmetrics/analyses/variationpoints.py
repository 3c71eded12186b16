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

from cppmetrics.lib.formula import TRUE, Conjunction, negate


##################################################
# variation point counting

class VariationPointCounter(object):
    '''Counts the variation points of a block hierarchy.

    The presence conditions of the blocks have to be added in pre-order,
    i.e., a block's own condition before the conditions of its children.
    Alternative branches (#elif, #else) of an already counted point are
    recognized heuristically and not counted again. All comparisons are
    structural, so the result is an approximation.
    '''

    def __init__(self, baseline=TRUE):
        self._count = 0
        # history of all pushed conditions, most recent last;
        # the baseline is never counted
        self.activeConditions = [baseline]
        # all alternatives derived so far
        self.knownAlternatives = []

    def add(self, pc):
        """Adds the presence condition of the next block."""
        if pc is None:
            return

        # same decision point entered again
        if pc == self.activeConditions[-1]:
            return

        # alternative branch of some point counted before
        if pc in self.knownAlternatives:
            return

        predecessor = self.activeConditions[-1]
        self._count += 1
        self.activeConditions.append(pc)
        self.knownAlternatives.append(self._getAlternative(pc, predecessor))

    def count(self):
        return self._count

    @staticmethod
    def _getAlternative(pc, predecessor):
        """Returns the presumed condition of the else-branch of pc: the
        inherited part of pc (if any) conjoined with the negated new part."""
        if isinstance(pc, Conjunction):
            if pc.left == predecessor:
                return Conjunction(pc.left, negate(pc.right))
            if pc.right == predecessor:
                return Conjunction(negate(pc.left), pc.right)
        return negate(pc)


def countVariationPoints(presenceConditions, baseline=TRUE):
    '''Convenience function: counts the variation points of the given
    presence conditions.'''
    counter = VariationPointCounter(baseline)
    for pc in presenceConditions:
        counter.add(pc)
    return counter.count()
