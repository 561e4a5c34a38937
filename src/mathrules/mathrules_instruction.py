"""RPN instruction alphabet for user-defined MathRules functions.

A user-defined function is a flat sequence of instructions in reverse
Polish order.  Const and Param push leaves; Cond, Map and Reduce declare
how many operands they take from the builder's operand stack in
`operand_count`.  For Apply that number is the callee's arity and is only
known once the callee has been looked up.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from mathrules.mathrules_value import MathRulesValue


@dataclass(frozen=True)
class MathRulesInstruction(ABC):
    """Abstract base class for all instructions."""

    @abstractmethod
    def describe(self) -> str:
        """Describe the instruction."""


@dataclass(frozen=True)
class MathRulesConst(MathRulesInstruction):
    """Push a literal value."""
    value: MathRulesValue

    def describe(self) -> str:
        return f"const {self.value.describe()}"


@dataclass(frozen=True)
class MathRulesParam(MathRulesInstruction):
    """Push a reference to a parameter slot."""
    index: int

    def describe(self) -> str:
        return f"param ${self.index}"


@dataclass(frozen=True)
class MathRulesCond(MathRulesInstruction):
    """Pop test, true branch and false branch (in push order) and push a condition."""

    operand_count = 3

    def describe(self) -> str:
        return "cond"


@dataclass(frozen=True)
class MathRulesApply(MathRulesInstruction):
    """Pop as many operands as the named function declares and push a call."""
    name: str

    def describe(self) -> str:
        return f"apply {self.name}"


@dataclass(frozen=True)
class MathRulesMap(MathRulesInstruction):
    """Pop a list operand and push a map of a unary function over it."""
    name: str

    operand_count = 1

    def describe(self) -> str:
        return f"map {self.name}"


@dataclass(frozen=True)
class MathRulesReduce(MathRulesInstruction):
    """Pop an initial value and a list (in push order) and push a left fold of a binary function."""
    name: str

    operand_count = 2

    def describe(self) -> str:
        return f"reduce {self.name}"
