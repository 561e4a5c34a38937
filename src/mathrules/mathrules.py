"""Main MathRules class: define and call functions by name."""

import logging
from typing import Any, Sequence

from mathrules.mathrules_builder import MathRulesFunctionBuilder
from mathrules.mathrules_context import MathRulesContext
from mathrules.mathrules_error import (
    MathRulesFunctionError, MathRulesInvalidInstructionsError, MathRulesInvalidParametersError,
    MathRulesUnknownFunctionError
)
from mathrules.mathrules_function import MathRulesFunction, MathRulesParameter
from mathrules.mathrules_instruction import MathRulesInstruction
from mathrules.mathrules_library import MathRulesLibrary
from mathrules.mathrules_value import MathRulesValue, make_value


class MathRules:
    """
    MathRules evaluator for small numeric functions assembled from RPN instructions.

    Owns (or wraps) a function library preloaded with the predefined
    catalog, builds user-defined functions into it, and calls functions by
    name with host Python values.
    """

    def __init__(self, library: MathRulesLibrary | None = None, parameter_prefix: str = "param"):
        """
        Initialize MathRules.

        Args:
            library: Function library to use; a new one with the predefined catalog is created if omitted
            parameter_prefix: Prefix for inferred parameter names of user-defined functions
        """
        self._logger = logging.getLogger("MathRules")
        self.library = library if library is not None else MathRulesLibrary()
        self.context = MathRulesContext(self.library)
        self.builder = MathRulesFunctionBuilder(parameter_prefix=parameter_prefix)

    def define(self, name: str, instructions: Sequence[MathRulesInstruction]) -> MathRulesFunction:
        """
        Build a function and register it under its name.

        Args:
            name: Function name
            instructions: RPN instruction stream

        Returns:
            The registered function

        Raises:
            MathRulesFunctionError: If building or registration fails
        """
        function = self.builder.build_function(name, instructions, self.library)
        self.library.register(function)
        self._logger.debug("Defined %s", function.describe())
        return function

    def define_recursive(
        self,
        name: str,
        instructions: Sequence[MathRulesInstruction],
        arity: int
    ) -> MathRulesFunction:
        """
        Build and register a function whose instructions call it by name.

        A stub with the given arity is registered first so that the recursive
        Apply instructions resolve, then the real function replaces it.  If
        anything fails the library is restored to its previous state.

        Args:
            name: Function name
            instructions: RPN instruction stream, which may apply the function itself
            arity: Number of parameters the function takes

        Returns:
            The registered function

        Raises:
            MathRulesFunctionError: If building or registration fails
        """
        stub = self._create_stub(name, arity)
        previous = next(
            (function for function in self.library.overloads(name) if function.distance(stub.parameter_types) == 0),
            None
        )
        self.library.register(stub)

        try:
            function = self.builder.build_function(name, instructions, self.library)
            if function.parameter_count != arity:
                raise MathRulesInvalidInstructionsError(
                    message=f"Function '{name}' was declared with {arity} parameters",
                    received=f"Instructions reference {function.parameter_count} parameters"
                )

        except MathRulesFunctionError:
            if previous is not None:
                self.library.register(previous)

            else:
                self.library.unregister(stub)

            raise

        self.library.register(function)
        self._logger.debug("Defined recursive %s", function.describe())
        return function

    def _create_stub(self, name: str, arity: int) -> MathRulesFunction:
        """Create a placeholder function for two-phase registration."""
        def body(_arguments: Any, _context: MathRulesContext) -> MathRulesValue:
            raise MathRulesUnknownFunctionError(name, context="Function is still being defined")

        return MathRulesFunction(
            name=name,
            parameters=tuple(
                MathRulesParameter(f"{self.builder.parameter_prefix}{i}", self.builder.GENERIC_TYPE)
                for i in range(arity)
            ),
            return_type=self.builder.GENERIC_TYPE,
            body=body,
            is_predefined=False
        )

    def call(self, name: str, *arguments: Any) -> MathRulesValue:
        """
        Call a function by name, selecting the best overload for the arguments.

        Args:
            name: Function name
            *arguments: Python values or MathRules values

        Returns:
            The result as a MathRules value

        Raises:
            MathRulesEvalError: If the function is unknown or evaluation fails
        """
        values = [make_value(argument) for argument in arguments]

        if name not in self.library:
            raise MathRulesUnknownFunctionError(name)

        function = self.library.lookup(name, values) or self.library.lookup_arity(name, len(values))
        if function is None:
            raise MathRulesInvalidParametersError(
                message=f"No overload of '{name}' takes {len(values)} arguments",
                expected=" or ".join(overload.describe() for overload in self.library.overloads(name))
            )

        return function.evaluate(self.context, values)

    def evaluate(self, name: str, *arguments: Any) -> Any:
        """
        Call a function by name and convert the result to Python types.

        Args:
            name: Function name
            *arguments: Python values or MathRules values

        Returns:
            The result as bool, int, float or list

        Raises:
            MathRulesEvalError: If the function is unknown or evaluation fails
        """
        return self.call(name, *arguments).to_python()

    def describe(self, instructions: Sequence[MathRulesInstruction]) -> str:
        """
        Render the tree built from an instruction stream, e.g. "(sqrt (+ (sqr $0) (sqr $1)))".

        Raises:
            MathRulesFunctionError: If the instructions do not form a valid tree
        """
        return self.builder.build_node(instructions, self.library).describe()
