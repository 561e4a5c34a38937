"""Tests for the MathRules facade."""

import logging

import pytest

from mathrules import (
    MathRules, MathRulesApply, MathRulesDuplicateFunctionError, MathRulesInvalidInstructionsError,
    MathRulesInvalidParametersError, MathRulesLibrary, MathRulesMap, MathRulesParam, MathRulesReal,
    MathRulesReduce, MathRulesUndefinedFunctionError, MathRulesUnknownFunctionError
)


HYPOTENUSE = [
    MathRulesParam(0),
    MathRulesApply("sqr"),
    MathRulesParam(1),
    MathRulesApply("sqr"),
    MathRulesApply("+"),
    MathRulesApply("sqrt"),
]


class TestMathRules:
    """Test defining and calling functions through the facade."""

    def test_define_and_evaluate(self, mathrules):
        """Test defining a function and calling it by name."""
        function = mathrules.define("hypot", HYPOTENUSE)
        assert function.describe() == "hypot(param0: real, param1: real) -> real"
        assert mathrules.evaluate("hypot", 3, 4) == 5.0

    def test_call_returns_values(self, mathrules):
        """Test that call returns MathRules values."""
        assert mathrules.call("+", 1, 2) == MathRulesReal(3.0)

    @pytest.mark.parametrize("name,arguments,expected", [
        ("pi", [], 3.141592653589793),
        ("sqrt", [2.25], 1.5),
        ("powern", [3, 3], 27.0),
        ("<=", [1, 2], True),
        ("==", [1, 2], False),
    ])
    def test_evaluate_predefined(self, mathrules, name, arguments, expected):
        """Test calling predefined functions with Python values."""
        assert mathrules.evaluate(name, *arguments) == expected

    def test_define_recursive(self, mathrules, helpers):
        """Test two-phase registration of factorial."""
        mathrules.define_recursive("fac", helpers.factorial_instructions(), 1)
        assert mathrules.evaluate("fac", 5) == 120.0
        assert len(mathrules.library.overloads("fac")) == 1

    def test_define_recursive_fibonacci(self, mathrules, helpers):
        """Test a doubly recursive definition."""
        mathrules.define_recursive("fib", helpers.fibonacci_instructions(), 1)
        assert mathrules.evaluate("fib", 7) == 13.0

    def test_define_recursive_withdraws_stub_on_failure(self, mathrules):
        """Test that a failed recursive definition leaves the library unchanged."""
        with pytest.raises(MathRulesInvalidInstructionsError):
            mathrules.define_recursive("bad", [MathRulesParam(0), MathRulesApply("bad"), MathRulesParam(0)], 1)

        assert "bad" not in mathrules.library

    def test_define_recursive_restores_previous_definition(self, mathrules):
        """Test that a failed redefinition keeps the earlier user function."""
        previous = mathrules.define("f", [MathRulesParam(0), MathRulesApply("sqr")])

        with pytest.raises(MathRulesUndefinedFunctionError):
            mathrules.define_recursive("f", [MathRulesParam(0), MathRulesApply("nope")], 1)

        assert mathrules.library.overloads("f") == (previous,)
        assert mathrules.evaluate("f", 3) == 9.0

    def test_define_recursive_checks_arity(self, mathrules):
        """Test that the instructions must use the declared number of parameters."""
        with pytest.raises(MathRulesInvalidInstructionsError, match="declared with 2 parameters"):
            mathrules.define_recursive("f", [MathRulesParam(0), MathRulesApply("sqr")], 2)

        assert "f" not in mathrules.library

    def test_define_recursive_cannot_replace_predefined(self, mathrules):
        """Test that a predefined signature cannot be used for a recursive function."""
        with pytest.raises(MathRulesDuplicateFunctionError):
            mathrules.define_recursive("sqrt", [MathRulesParam(0)], 1)

        assert mathrules.evaluate("sqrt", 4) == 2.0

    def test_define_rejects_predefined_signature(self, mathrules):
        """Test that define cannot override a predefined function."""
        with pytest.raises(MathRulesDuplicateFunctionError):
            mathrules.define("+", [MathRulesParam(0), MathRulesParam(1), MathRulesApply("-")])

        assert mathrules.evaluate("+", 2, 3) == 5.0

    def test_redefine_replaces(self, mathrules):
        """Test that redefining a user function replaces it."""
        mathrules.define("f", [MathRulesParam(0), MathRulesApply("sqr")])
        mathrules.define("f", [MathRulesParam(0), MathRulesApply("sqrt")])
        assert mathrules.evaluate("f", 16) == 4.0

    def test_list_arguments(self, mathrules):
        """Test map and reduce with Python lists."""
        mathrules.define("sum_sq", [
            MathRulesParam(0),
            MathRulesParam(1),
            MathRulesMap("sqr"),
            MathRulesReduce("+"),
        ])
        assert mathrules.evaluate("sum_sq", 0, [1, 2, 3, 4, 5]) == 55.0

    def test_unknown_function(self, mathrules):
        """Test calling a name that is not registered."""
        with pytest.raises(MathRulesUnknownFunctionError, match="Unknown function: 'nope'"):
            mathrules.call("nope", 1)

    def test_wrong_argument_count(self, mathrules):
        """Test calling with a number of arguments no overload takes."""
        with pytest.raises(MathRulesInvalidParametersError, match="No overload of 'sqrt' takes 2 arguments"):
            mathrules.call("sqrt", 1, 2)

    def test_describe(self, mathrules):
        """Test debug rendering through the facade."""
        assert mathrules.describe(HYPOTENUSE) == "(sqrt (+ (sqr $0) (sqr $1)))"

    def test_wraps_host_library(self):
        """Test that a host-provided library is used and mutated in place."""
        library = MathRulesLibrary()
        mathrules = MathRules(library=library)
        mathrules.define("hypot", HYPOTENUSE)

        assert mathrules.library is library
        assert "hypot" in library

    def test_parameter_prefix(self):
        """Test configuring parameter names."""
        mathrules = MathRules(parameter_prefix="x")
        assert mathrules.define("hypot", HYPOTENUSE).describe() == "hypot(x0: real, x1: real) -> real"


class TestLogging:
    """Test log output of stateful components."""

    def test_definitions_are_logged(self, mathrules, caplog):
        """Test that definitions are logged at debug level."""
        caplog.set_level(logging.DEBUG, logger="MathRules")
        mathrules.define("hypot", HYPOTENUSE)
        assert "Defined hypot(param0: real, param1: real) -> real" in caplog.text

    def test_rejected_duplicates_are_logged(self, mathrules, caplog):
        """Test that rejected registrations are logged as warnings."""
        caplog.set_level(logging.WARNING, logger="MathRulesLibrary")
        with pytest.raises(MathRulesDuplicateFunctionError):
            mathrules.define("sqr", [MathRulesParam(0), MathRulesParam(0), MathRulesApply("*")])

        assert "Rejected registration of 'sqr'" in caplog.text
