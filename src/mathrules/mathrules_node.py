"""MathRules node types - the executable tree built from an instruction stream.

Nodes mirror the instruction alphabet but hold resolved child nodes instead
of stack positions.  Every node is owned by exactly one parent, so a built
function body is a strict tree.  Function names inside Apply, Map and
Reduce nodes are resolved against the library at evaluation time, which is
what allows recursion without cycles in the tree itself.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

from mathrules.mathrules_value import MathRulesValue


@dataclass(frozen=True)
class MathRulesNode(ABC):
    """Abstract base class for all tree nodes."""

    @abstractmethod
    def children(self) -> Tuple['MathRulesNode', ...]:
        """Return the child nodes, in evaluation order."""

    @abstractmethod
    def describe(self) -> str:
        """Render the subtree in prefix form for debugging."""


@dataclass(frozen=True)
class MathRulesConstantNode(MathRulesNode):
    """A literal value."""
    value: MathRulesValue

    def children(self) -> Tuple[MathRulesNode, ...]:
        return ()

    def describe(self) -> str:
        return self.value.describe()


@dataclass(frozen=True)
class MathRulesParameterNode(MathRulesNode):
    """A reference to an actual parameter by position."""
    index: int

    def children(self) -> Tuple[MathRulesNode, ...]:
        return ()

    def describe(self) -> str:
        return f"${self.index}"


@dataclass(frozen=True)
class MathRulesConditionNode(MathRulesNode):
    """Evaluates exactly one of two branches depending on a boolean test."""
    test: MathRulesNode
    if_true: MathRulesNode
    if_false: MathRulesNode

    def children(self) -> Tuple[MathRulesNode, ...]:
        return (self.test, self.if_true, self.if_false)

    def describe(self) -> str:
        return f"(cond {self.test.describe()} {self.if_true.describe()} {self.if_false.describe()})"


@dataclass(frozen=True)
class MathRulesApplyNode(MathRulesNode):
    """A call of a named function with eagerly evaluated arguments."""
    name: str
    arguments: Tuple[MathRulesNode, ...] = ()

    def children(self) -> Tuple[MathRulesNode, ...]:
        return self.arguments

    def describe(self) -> str:
        if not self.arguments:
            return f"({self.name})"

        return f"({self.name} {' '.join(argument.describe() for argument in self.arguments)})"


@dataclass(frozen=True)
class MathRulesMapNode(MathRulesNode):
    """Applies a named unary function to every element of a list."""
    name: str
    list_node: MathRulesNode

    def children(self) -> Tuple[MathRulesNode, ...]:
        return (self.list_node,)

    def describe(self) -> str:
        return f'(map "{self.name}" {self.list_node.describe()})'


@dataclass(frozen=True)
class MathRulesReduceNode(MathRulesNode):
    """Left-folds a named binary function over a list, starting from an initial value."""
    name: str
    initial_node: MathRulesNode
    list_node: MathRulesNode

    def children(self) -> Tuple[MathRulesNode, ...]:
        return (self.initial_node, self.list_node)

    def describe(self) -> str:
        return f'(reduce "{self.name}" {self.initial_node.describe()} {self.list_node.describe()})'
