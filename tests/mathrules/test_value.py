"""Tests for MathRules values and host value conversion."""

import pytest

from mathrules import (
    MathRulesBoolean, MathRulesInteger, MathRulesInvalidTypeError, MathRulesList, MathRulesReal, MathRulesType,
    make_value
)


class TestValues:
    """Test value construction, equality and rendering."""

    @pytest.mark.parametrize("python_value,expected", [
        (True, MathRulesBoolean(True)),
        (False, MathRulesBoolean(False)),
        (0, MathRulesInteger(0)),
        (-7, MathRulesInteger(-7)),
        (2.5, MathRulesReal(2.5)),
        ([], MathRulesList(())),
        ([1, 2.0], MathRulesList((MathRulesInteger(1), MathRulesReal(2.0)))),
        ((1, (True,)), MathRulesList((MathRulesInteger(1), MathRulesList((MathRulesBoolean(True),))))),
    ])
    def test_make_value(self, python_value, expected):
        """Test conversion of host Python data."""
        assert make_value(python_value) == expected

    def test_make_value_checks_bool_before_int(self):
        """Test that bools never become integers."""
        assert isinstance(make_value(True), MathRulesBoolean)

    def test_make_value_passes_values_through(self):
        """Test that existing values are returned unchanged."""
        value = MathRulesReal(1.5)
        assert make_value(value) is value

    @pytest.mark.parametrize("python_value", ["text", None, {"a": 1}, 1j])
    def test_make_value_rejects_unsupported_types(self, python_value):
        """Test that data without a MathRules equivalent is rejected."""
        with pytest.raises(MathRulesInvalidTypeError, match="Cannot convert Python value"):
            make_value(python_value)

    def test_equality_is_type_strict(self):
        """Test that an integer never equals a real with the same number."""
        assert MathRulesInteger(1) != MathRulesReal(1.0)
        assert MathRulesInteger(1) == MathRulesInteger(1)
        assert MathRulesList((MathRulesInteger(1),)) != MathRulesList((MathRulesReal(1.0),))

    @pytest.mark.parametrize("value,expected", [
        (MathRulesBoolean(True), "true"),
        (MathRulesBoolean(False), "false"),
        (MathRulesInteger(3), "3"),
        (MathRulesReal(1.5), "1.5"),
        (MathRulesList(()), "[]"),
        (make_value([1, 2, 3, 4, 5]), "[1, 2, 3, 4, 5]"),
        (make_value([[1], []]), "[[1], []]"),
    ])
    def test_describe(self, value, expected):
        """Test debug rendering of values."""
        assert value.describe() == expected

    @pytest.mark.parametrize("value,tag", [
        (MathRulesBoolean(True), MathRulesType.BOOLEAN),
        (MathRulesInteger(1), MathRulesType.INTEGER),
        (MathRulesReal(1.0), MathRulesType.REAL),
        (MathRulesList(()), MathRulesType.LIST),
    ])
    def test_type_tags(self, value, tag):
        """Test type tags and their names."""
        assert value.type_tag() == tag
        assert value.type_name() == tag.value

    def test_to_python(self):
        """Test conversion back to Python data."""
        assert make_value([1, 2.5, [True]]).to_python() == [1, 2.5, [True]]

    @pytest.mark.parametrize("python_value", [2 ** 63 - 1, -2 ** 63])
    def test_make_value_accepts_64_bit_range(self, python_value):
        """Test the integer range boundaries."""
        assert make_value(python_value) == MathRulesInteger(python_value)

    @pytest.mark.parametrize("python_value", [2 ** 63, -2 ** 63 - 1, 10 ** 400, [1, 10 ** 400]])
    def test_make_value_rejects_out_of_range_integers(self, python_value):
        """Test that integers outside 64 bits are rejected."""
        with pytest.raises(MathRulesInvalidTypeError, match="Integer out of range"):
            make_value(python_value)

    def test_huge_integer_argument(self, mathrules):
        """Test that a huge integer argument fails with a MathRules error."""
        with pytest.raises(MathRulesInvalidTypeError, match="Integer out of range"):
            mathrules.call("sqr", 10 ** 400)
