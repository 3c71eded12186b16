"""Tests for parsing of preprocessor conditions."""

import importlib
import warnings

from cppmetrics.lib import cpplib
from cppmetrics.lib.cpplib import getDirectiveCondition, parseCondition
from cppmetrics.lib.formula import TRUE, FALSE, Conjunction, Disjunction, Negation, Variable


class TestParseCondition:
    """Tests for #if and #elif expressions."""

    def test_defined_with_and_without_parentheses(self):
        assert parseCondition("defined(A) && !defined B") == \
            Conjunction(Variable("A"), Negation(Variable("B")))

    def test_plain_identifier(self):
        assert parseCondition("CONFIG_X") == Variable("CONFIG_X")

    def test_and_binds_stronger_than_or(self):
        assert parseCondition("A || B && C") == \
            Disjunction(Variable("A"), Conjunction(Variable("B"), Variable("C")))

    def test_left_associative(self):
        assert parseCondition("A && B && C") == \
            Conjunction(Conjunction(Variable("A"), Variable("B")), Variable("C"))

    def test_parentheses(self):
        assert parseCondition("!(A || B)") == Negation(Disjunction(Variable("A"), Variable("B")))

    def test_numbers(self):
        assert parseCondition("0") == FALSE
        assert parseCondition("1") == TRUE
        assert parseCondition("0x10") == TRUE

    def test_comparison_is_one_variable(self):
        assert parseCondition("VERSION >= 3") == Variable("VERSION_ge_3")
        assert parseCondition("defined(A) && X == 2") == \
            Conjunction(Variable("A"), Variable("X_eq_2"))

    def test_macro_call_is_one_variable(self):
        assert parseCondition("IS_ENABLED(CONFIG_X)") == Variable("IS_ENABLED(CONFIG_X)")

    def test_comments_are_ignored(self):
        assert parseCondition("defined(A) /* enables A */") == Variable("A")

    def test_unparsable_expression(self, capsys):
        assert parseCondition("A &&") is None
        assert "ERROR (parse)" in capsys.readouterr().out

    def test_empty_expression(self):
        assert parseCondition("   ") is None


class TestDirectiveCondition:
    """Tests for the conditions of the different directives."""

    def test_ifdef(self):
        assert getDirectiveCondition("ifdef", " A ") == Variable("A")

    def test_ifndef(self):
        assert getDirectiveCondition("ifndef", "A") == Negation(Variable("A"))

    def test_if_and_elif(self):
        assert getDirectiveCondition("if", "defined(A)") == Variable("A")
        assert getDirectiveCondition("elif", "B") == Variable("B")

    def test_else_has_no_condition(self):
        assert getDirectiveCondition("else", "") is None


class TestGrammar:
    def test_building_the_grammar_is_free_of_deprecations(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            importlib.reload(cpplib)

        assert [w for w in caught if issubclass(w.category, DeprecationWarning)] == []
        assert cpplib.parseCondition("A || B") == Disjunction(Variable("A"), Variable("B"))
