"""Builds executable node trees and functions from RPN instruction streams."""

import logging
from typing import List, Sequence, Tuple

from mathrules.mathrules_context import MathRulesContext
from mathrules.mathrules_error import (
    MathRulesInvalidInstructionsError, MathRulesInvalidParameterIndexError, MathRulesUndefinedFunctionError
)
from mathrules.mathrules_evaluator import MathRulesEvaluator
from mathrules.mathrules_function import MathRulesFunction, MathRulesParameter
from mathrules.mathrules_instruction import (
    MathRulesInstruction, MathRulesConst, MathRulesParam, MathRulesCond,
    MathRulesApply, MathRulesMap, MathRulesReduce
)
from mathrules.mathrules_library import MathRulesLibrary
from mathrules.mathrules_node import (
    MathRulesNode, MathRulesConstantNode, MathRulesParameterNode, MathRulesConditionNode,
    MathRulesApplyNode, MathRulesMapNode, MathRulesReduceNode
)
from mathrules.mathrules_value import MathRulesType, MathRulesValue


class MathRulesFunctionBuilder:
    """
    Turns a flat instruction stream into a validated node tree.

    Instructions are processed left to right against an operand stack of
    already built nodes.  Function names are looked up in the library at
    build time only to learn their arity; calls are resolved again by name at
    evaluation time.  Built functions are not registered automatically.

    Recursive functions use two-phase registration: register a stub with the
    target name and arity, build the real body (its Apply instructions now
    resolve), then register the real function to replace the stub.
    """

    # Inferred parameter and return type of user-defined functions
    GENERIC_TYPE = MathRulesType.REAL

    def __init__(self, parameter_prefix: str = "param", evaluator: MathRulesEvaluator | None = None) -> None:
        """
        Initialize the builder.

        Args:
            parameter_prefix: Prefix for inferred parameter names (param0, param1, ...)
            evaluator: Evaluator used by built function bodies
        """
        self._logger = logging.getLogger("MathRulesFunctionBuilder")
        self.parameter_prefix = parameter_prefix
        self.evaluator = evaluator or MathRulesEvaluator()

    def build_function(
        self,
        name: str,
        instructions: Sequence[MathRulesInstruction],
        library: MathRulesLibrary
    ) -> MathRulesFunction:
        """
        Build a user-defined function from an instruction stream.

        Args:
            name: Name of the function
            instructions: RPN instruction stream
            library: Library used to resolve function arities

        Returns:
            A function whose body evaluates the built tree

        Raises:
            MathRulesFunctionError: If the instructions do not form a valid tree
        """
        node = self.build_node(instructions, library)
        parameters = self.infer_parameters(instructions)
        evaluator = self.evaluator

        def body(arguments: List[MathRulesValue], context: MathRulesContext) -> MathRulesValue:
            return evaluator.evaluate(node, context, arguments)

        function = MathRulesFunction(
            name=name,
            parameters=parameters,
            return_type=self.GENERIC_TYPE,
            body=body,
            is_predefined=False
        )
        self._logger.debug("Built function %s = %s", function.describe(), node.describe())
        return function

    def build_node(self, instructions: Sequence[MathRulesInstruction], library: MathRulesLibrary) -> MathRulesNode:
        """
        Build the node tree for an instruction stream.

        Args:
            instructions: RPN instruction stream
            library: Library used to resolve function arities

        Returns:
            The root node

        Raises:
            MathRulesInvalidInstructionsError: If the stack underflows or does not end with exactly one node
            MathRulesUndefinedFunctionError: If a named function is absent or has the wrong arity
            MathRulesInvalidParameterIndexError: If parameter references are negative or not contiguous
        """
        stack: List[MathRulesNode] = []

        for position, instruction in enumerate(instructions):
            if isinstance(instruction, MathRulesConst):
                stack.append(MathRulesConstantNode(instruction.value))
                continue

            if isinstance(instruction, MathRulesParam):
                stack.append(MathRulesParameterNode(instruction.index))
                continue

            if isinstance(instruction, MathRulesCond):
                test, if_true, if_false = self._pop(stack, instruction.operand_count, instruction, position)
                stack.append(MathRulesConditionNode(test, if_true, if_false))
                continue

            if isinstance(instruction, MathRulesApply):
                function = library.lookup(instruction.name)
                if function is None:
                    raise MathRulesUndefinedFunctionError(
                        instruction.name,
                        context=f"Instruction {position}: {instruction.describe()}",
                        suggestion="Register the function before building code that calls it"
                    )

                arguments = self._pop(stack, function.parameter_count, instruction, position)
                stack.append(MathRulesApplyNode(instruction.name, arguments))
                continue

            if isinstance(instruction, MathRulesMap):
                self._require_arity(library, instruction.name, 1, instruction, position)
                (list_node,) = self._pop(stack, instruction.operand_count, instruction, position)
                stack.append(MathRulesMapNode(instruction.name, list_node))
                continue

            if isinstance(instruction, MathRulesReduce):
                self._require_arity(library, instruction.name, 2, instruction, position)
                initial_node, list_node = self._pop(stack, instruction.operand_count, instruction, position)
                stack.append(MathRulesReduceNode(instruction.name, initial_node, list_node))
                continue

            raise MathRulesInvalidInstructionsError(
                message=f"Unknown instruction at position {position}: {instruction!r}"
            )

        if len(stack) != 1:
            raise MathRulesInvalidInstructionsError(
                message="Instructions must reduce to exactly one expression",
                received=f"{len(stack)} expressions left on the stack"
            )

        self.infer_parameters(instructions)
        return stack[0]

    def infer_parameters(self, instructions: Sequence[MathRulesInstruction]) -> Tuple[MathRulesParameter, ...]:
        """
        Infer the parameter list from the referenced parameter slots.

        Referenced indices must be exactly 0 .. n-1 for some n.  All
        parameters get the generic numeric type; whether the instructions
        really compute with that type is not checked.

        Args:
            instructions: RPN instruction stream

        Returns:
            Positionally named parameters

        Raises:
            MathRulesInvalidParameterIndexError: If an index is negative or leaves a gap
        """
        indices: List[int] = []
        for instruction in instructions:
            if isinstance(instruction, MathRulesParam) and instruction.index not in indices:
                indices.append(instruction.index)

        for index in indices:
            if index < 0 or index >= len(indices):
                raise MathRulesInvalidParameterIndexError(
                    index,
                    received=f"Referenced parameter indices: {sorted(indices)}"
                )

        return tuple(
            MathRulesParameter(f"{self.parameter_prefix}{i}", self.GENERIC_TYPE) for i in range(len(indices))
        )

    def _pop(
        self,
        stack: List[MathRulesNode],
        count: int,
        instruction: MathRulesInstruction,
        position: int
    ) -> Tuple[MathRulesNode, ...]:
        """Pop the top count nodes, returned in push order."""
        if len(stack) < count:
            raise MathRulesInvalidInstructionsError(
                message=f"Not enough operands for instruction {position}: {instruction.describe()}",
                expected=f"{count} operands",
                received=f"{len(stack)} operands"
            )

        if count == 0:
            return ()

        operands = tuple(stack[-count:])
        del stack[-count:]
        return operands

    def _require_arity(
        self,
        library: MathRulesLibrary,
        name: str,
        arity: int,
        instruction: MathRulesInstruction,
        position: int
    ) -> None:
        """Require that a function with the given arity is registered under a name."""
        if library.lookup_arity(name, arity) is None:
            raise MathRulesUndefinedFunctionError(
                name,
                context=f"Instruction {position}: {instruction.describe()}",
                expected=f"A function with exactly {arity} parameter{'s' if arity != 1 else ''}"
            )
