"""Named, typed, callable units: predefined primitives and user-defined functions."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Sequence, Tuple

from mathrules.mathrules_error import MathRulesInvalidParametersError
from mathrules.mathrules_value import MathRulesType, MathRulesValue

if TYPE_CHECKING:
    from mathrules.mathrules_context import MathRulesContext


@dataclass(frozen=True)
class MathRulesParameter:
    """A named, typed parameter in a function signature."""
    name: str
    type: MathRulesType

    def describe(self) -> str:
        return f"{self.name}: {self.type.value}"


@dataclass(frozen=True)
class MathRulesFunction:
    """
    Represents a predefined or a user-defined function.

    The implementation is encapsulated in a body callable that maps a list of
    argument values and an evaluation context onto a result.  Predefined
    bodies typically ignore the context; user-defined bodies evaluate a node
    tree in it.

    Functions are immutable once constructed and may be shared freely.
    """
    name: str
    parameters: Tuple[MathRulesParameter, ...]
    return_type: MathRulesType
    body: Callable[[List[MathRulesValue], 'MathRulesContext'], MathRulesValue]
    is_predefined: bool = False

    @property
    def parameter_count(self) -> int:
        """Number of declared parameters."""
        return len(self.parameters)

    @property
    def parameter_types(self) -> Tuple[MathRulesType, ...]:
        """Declared parameter types, in order."""
        return tuple(parameter.type for parameter in self.parameters)

    def distance(self, argument_types: Sequence[MathRulesType]) -> int | None:
        """
        Compute how far a list of argument types is from this function's parameter types.

        Identical types contribute nothing.  An integer argument for a real
        parameter is a promotion and sets one bit; the first parameter owns the
        most significant bit, so a promotion on an earlier argument costs more
        than any promotions on later ones.  Any other mismatch, or a different
        number of arguments, means the function cannot accept the arguments.

        Args:
            argument_types: Types of the candidate arguments

        Returns:
            The distance (0 for an exact match), or None if there is no match
        """
        count = len(self.parameters)
        if len(argument_types) != count:
            return None

        distance = 0
        for i, (argument_type, parameter_type) in enumerate(zip(argument_types, self.parameter_types)):
            if argument_type == parameter_type:
                continue

            if argument_type == MathRulesType.INTEGER and parameter_type == MathRulesType.REAL:
                distance |= 1 << (count - 1 - i)
                continue

            return None

        return distance

    def evaluate(self, context: 'MathRulesContext', arguments: Sequence[MathRulesValue]) -> MathRulesValue:
        """
        Evaluate the function in a context with given arguments.

        Args:
            context: Evaluation context giving access to the function library
            arguments: Actual parameters, one per declared parameter

        Returns:
            The function result

        Raises:
            MathRulesInvalidParametersError: If the argument count does not match the signature
            MathRulesEvalError: If the body fails
        """
        if len(arguments) != len(self.parameters):
            raise MathRulesInvalidParametersError(
                message=f"Function '{self.name}' expects {len(self.parameters)} arguments, got {len(arguments)}",
                expected=f"Parameters: {self.describe_parameters()}",
                received=f"Arguments: {', '.join(argument.describe() for argument in arguments) or '(none)'}"
            )

        return self.body(list(arguments), context)

    def describe_parameters(self) -> str:
        """Describe the parameter list, e.g. "lhs: real, rhs: real"."""
        if not self.parameters:
            return "(no parameters)"

        return ", ".join(parameter.describe() for parameter in self.parameters)

    def describe(self) -> str:
        """Describe the function signature."""
        parameters = ", ".join(parameter.describe() for parameter in self.parameters)
        return f"{self.name}({parameters}) -> {self.return_type.value}"
