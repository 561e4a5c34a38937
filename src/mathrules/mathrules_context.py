"""Evaluation context for MathRules functions."""

from dataclasses import dataclass
from typing import Sequence

from mathrules.mathrules_function import MathRulesFunction
from mathrules.mathrules_library import MathRulesLibrary
from mathrules.mathrules_value import MathRulesValue


@dataclass(frozen=True)
class MathRulesContext:
    """
    Immutable evaluation handle giving read access to a function library.

    The context does not own the library.  Evaluation only ever reads
    through it; registration goes to the library directly.
    """
    library: MathRulesLibrary

    def lookup(self, name: str, arguments: Sequence[MathRulesValue] | None = None) -> MathRulesFunction | None:
        """Look up a function in the library (see MathRulesLibrary.lookup)."""
        return self.library.lookup(name, arguments)

    def lookup_arity(self, name: str, arity: int) -> MathRulesFunction | None:
        """Look up the first overload of a name with a given parameter count."""
        return self.library.lookup_arity(name, arity)
