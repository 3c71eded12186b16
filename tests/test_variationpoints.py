"""Tests for counting variation points."""

import itertools

from cppmetrics.analyses.variationpoints import VariationPointCounter, countVariationPoints
from cppmetrics.lib.formula import TRUE, Conjunction, Disjunction, Negation, Variable

A = Variable("A")
B = Variable("B")
C = Variable("C")


class TestVariationPointCounter:
    """Tests for the heuristic counting of variation points."""

    def test_no_input(self):
        assert VariationPointCounter().count() == 0

    def test_baseline_is_not_counted(self):
        counter = VariationPointCounter(A)
        counter.add(A)
        assert counter.count() == 0

    def test_single_variation_point(self):
        counter = VariationPointCounter()
        counter.add(A)
        assert counter.count() == 1

    def test_else_branch_is_recognized(self):
        counter = VariationPointCounter()
        counter.add(A)
        counter.add(Negation(A))
        assert counter.count() == 1

    def test_nested_variation_point(self):
        counter = VariationPointCounter()
        counter.add(A)
        counter.add(Conjunction(A, B))
        assert counter.count() == 2

    def test_nested_else_and_outer_else(self):
        counter = VariationPointCounter()
        counter.add(A)
        counter.add(Conjunction(A, B))
        counter.add(Conjunction(A, Negation(B)))
        assert counter.count() == 2
        # the last counted point is the inner one
        counter.add(Negation(A))
        assert counter.count() == 2

    def test_elif_chain(self):
        counter = VariationPointCounter()
        for pc in [A, Conjunction(A, B), Conjunction(A, C), Negation(A)]:
            counter.add(pc)
        assert counter.count() == 3

    def test_sibling_recurrence_counts_again(self):
        counter = VariationPointCounter()
        for pc in [A, B, A]:
            counter.add(pc)
        assert counter.count() == 3

    def test_repeated_condition_is_noop(self):
        counter = VariationPointCounter()
        counter.add(A)
        counter.add(A)
        assert counter.count() == 1

    def test_absent_condition_is_noop(self):
        counter = VariationPointCounter()
        counter.add(None)
        assert counter.count() == 0

    def test_inherited_part_on_the_right(self):
        counter = VariationPointCounter()
        counter.add(A)
        counter.add(Conjunction(B, A))
        counter.add(Conjunction(Negation(B), A))
        assert counter.count() == 2

    def test_negated_new_part_is_unwrapped(self):
        counter = VariationPointCounter()
        counter.add(Negation(A))
        counter.add(A)
        assert counter.count() == 1

    def test_unexpected_shapes_do_not_fail(self):
        counter = VariationPointCounter(Disjunction(A, B))
        counter.add(Disjunction(Conjunction(A, C), TRUE))
        counter.add(Negation(Disjunction(Conjunction(A, C), TRUE)))
        assert counter.count() == 1

    def test_count_equals_pushed_conditions(self):
        counter = VariationPointCounter()
        for pc in [A, Conjunction(A, B), Negation(A), B]:
            counter.add(pc)
        assert counter.count() == len(counter.activeConditions) - 1

    def test_monotonic(self):
        formulas = [A, B, Negation(A), Conjunction(A, B), Conjunction(A, Negation(B)), TRUE]
        for sequence in itertools.product(formulas, repeat=3):
            counter = VariationPointCounter()
            last = 0
            for pc in sequence:
                counter.add(pc)
                assert counter.count() >= last
                last = counter.count()

    def test_convenience_function(self):
        assert countVariationPoints([A, Conjunction(A, B), Negation(A)]) == 2
        assert countVariationPoints([A], baseline=A) == 0
