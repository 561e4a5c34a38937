"""MathRules Value hierarchy - immutable runtime value types.

Values are the only data produced and consumed by evaluation.  They are
frozen dataclasses, so equality is structural and type-strict: an integer
never compares equal to a real, even when both hold the same number.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Tuple

from mathrules.mathrules_error import MathRulesInvalidTypeError


# Integers are 64-bit signed values
INTEGER_MIN = -2 ** 63
INTEGER_MAX = 2 ** 63 - 1


class MathRulesType(Enum):
    """Type tags used in function signatures."""
    BOOLEAN = "boolean"
    INTEGER = "integer"
    REAL = "real"
    LIST = "list"


@dataclass(frozen=True)
class MathRulesValue(ABC):
    """
    Abstract base class for all MathRules runtime values.

    All runtime values are immutable.
    """

    @abstractmethod
    def to_python(self) -> Any:
        """Convert to Python value for operations."""

    @abstractmethod
    def type_tag(self) -> MathRulesType:
        """Return the type tag used for overload resolution."""

    @abstractmethod
    def describe(self) -> str:
        """Describe the value."""

    def type_name(self) -> str:
        """Return MathRules type name for error messages."""
        return self.type_tag().value


@dataclass(frozen=True)
class MathRulesBoolean(MathRulesValue):
    """Represents boolean values."""
    value: bool

    def to_python(self) -> bool:
        return self.value

    def type_tag(self) -> MathRulesType:
        return MathRulesType.BOOLEAN

    def describe(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class MathRulesInteger(MathRulesValue):
    """Represents integer values."""
    value: int

    def to_python(self) -> int:
        return self.value

    def type_tag(self) -> MathRulesType:
        return MathRulesType.INTEGER

    def describe(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class MathRulesReal(MathRulesValue):
    """Represents real (floating-point) values."""
    value: float

    def to_python(self) -> float:
        return self.value

    def type_tag(self) -> MathRulesType:
        return MathRulesType.REAL

    def describe(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class MathRulesList(MathRulesValue):
    """
    Represents lists of MathRules values.

    Lists are homogeneous by convention; nothing enforces it.
    """
    elements: Tuple[MathRulesValue, ...] = ()

    def to_python(self) -> List[Any]:
        """Convert to Python list with Python values."""
        return [elem.to_python() for elem in self.elements]

    def type_tag(self) -> MathRulesType:
        return MathRulesType.LIST

    def describe(self) -> str:
        return f"[{', '.join(element.describe() for element in self.elements)}]"


def make_value(value: Any) -> MathRulesValue:
    """
    Convert host Python data into a MathRules value.

    Args:
        value: A bool, int, float, list or tuple of such, or an existing MathRules value

    Returns:
        The equivalent MathRules value

    Raises:
        MathRulesInvalidTypeError: If the value has no MathRules equivalent or an integer is out of range
    """
    if isinstance(value, MathRulesValue):
        return value

    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return MathRulesBoolean(value)

    if isinstance(value, int):
        if not INTEGER_MIN <= value <= INTEGER_MAX:
            raise MathRulesInvalidTypeError(
                message="Integer out of range",
                received=f"An integer of {value.bit_length()} bits",
                expected=f"An integer between {INTEGER_MIN} and {INTEGER_MAX}",
                suggestion="Use a float for values outside the 64-bit integer range"
            )

        return MathRulesInteger(value)

    if isinstance(value, float):
        return MathRulesReal(value)

    if isinstance(value, (list, tuple)):
        return MathRulesList(tuple(make_value(element) for element in value))

    raise MathRulesInvalidTypeError(
        message=f"Cannot convert Python value of type {type(value).__name__}",
        received=repr(value),
        expected="bool, int, float, or a list of these"
    )
