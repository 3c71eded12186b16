"""Tests for cppmetrics.lib.formula."""

import pytest

from cppmetrics.lib.formula import TRUE, FALSE, Conjunction, Disjunction, FormulaVisitor, Negation, \
    Variable, conjunction, getVariableNames, negate


class TestEquality:
    """Structural equality of formulas."""

    def test_same_structure_is_equal(self):
        assert Conjunction(Variable("A"), Negation(Variable("B"))) == \
            Conjunction(Variable("A"), Negation(Variable("B")))

    def test_operand_order_matters(self):
        assert Conjunction(Variable("A"), Variable("B")) != Conjunction(Variable("B"), Variable("A"))

    def test_different_connectives_are_not_equal(self):
        assert Conjunction(Variable("A"), Variable("B")) != Disjunction(Variable("A"), Variable("B"))

    def test_constants(self):
        assert TRUE == TRUE
        assert TRUE != FALSE
        assert Variable("A") != TRUE

    def test_hashable(self):
        formulas = {Negation(Variable("A")), Negation(Variable("A")), Variable("A")}
        assert len(formulas) == 2

    def test_immutable(self):
        with pytest.raises(AttributeError):
            Variable("A").name = "B"


class TestHelpers:
    """Tests for negate, conjunction and variable extraction."""

    def test_negate_unwraps_negation(self):
        assert negate(Negation(Variable("A"))) == Variable("A")
        assert negate(Variable("A")) == Negation(Variable("A"))

    def test_conjunction_is_left_nested_and_skips_true(self):
        a, b, c = Variable("A"), Variable("B"), Variable("C")
        assert conjunction(TRUE, a, b, c) == Conjunction(Conjunction(a, b), c)
        assert conjunction(TRUE) == TRUE
        assert conjunction(a, None) == a

    def test_variable_names_in_first_seen_order(self):
        f = Disjunction(Conjunction(Variable("B"), Negation(Variable("A"))), Variable("B"))
        assert getVariableNames(f) == ["B", "A"]
        assert getVariableNames(None) == []
        assert getVariableNames(TRUE) == []

    def test_string_rendering(self):
        f = Conjunction(Variable("A"), Negation(Disjunction(Variable("B"), Variable("C"))))
        assert str(f) == "A && !(B || C)"


class TestVisitor:
    """The visitor has to handle every variant."""

    def test_incomplete_visitor_cannot_be_created(self):
        class OnlyVariables(FormulaVisitor):
            def visitVariable(self, formula):
                return formula.name

        with pytest.raises(TypeError):
            OnlyVariables()

    def test_visit_dispatches_by_variant(self):
        class Depth(FormulaVisitor):
            def visitTrue(self, formula):
                return 0

            def visitFalse(self, formula):
                return 0

            def visitVariable(self, formula):
                return 1

            def visitNegation(self, formula):
                return 1 + self.visit(formula.formula)

            def visitConjunction(self, formula):
                return 1 + max(self.visit(formula.left), self.visit(formula.right))

            def visitDisjunction(self, formula):
                return 1 + max(self.visit(formula.left), self.visit(formula.right))

        f = Conjunction(Variable("A"), Negation(Disjunction(Variable("B"), TRUE)))
        assert Depth().visit(f) == 4
