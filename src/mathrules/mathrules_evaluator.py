"""Tree-walking evaluator for MathRules node trees."""

from typing import List, Sequence

from mathrules.mathrules_context import MathRulesContext
from mathrules.mathrules_error import (
    MathRulesInvalidParametersError, MathRulesInvalidTypeError, MathRulesUnknownFunctionError
)
from mathrules.mathrules_function import MathRulesFunction
from mathrules.mathrules_node import (
    MathRulesNode, MathRulesConstantNode, MathRulesParameterNode, MathRulesConditionNode,
    MathRulesApplyNode, MathRulesMapNode, MathRulesReduceNode
)
from mathrules.mathrules_value import MathRulesBoolean, MathRulesList, MathRulesValue


class MathRulesEvaluator:
    """
    Evaluates node trees against a parameter vector and a context.

    Evaluation is synchronous and recursive.  There is no depth limit: deeply
    or unboundedly recursive user functions run until Python's own recursion
    limit raises RecursionError.
    """

    def evaluate(
        self,
        node: MathRulesNode,
        context: MathRulesContext,
        parameters: Sequence[MathRulesValue]
    ) -> MathRulesValue:
        """
        Recursively evaluate a node.

        Args:
            node: Node to evaluate
            context: Evaluation context for function lookups
            parameters: Actual parameters of the enclosing function

        Returns:
            Evaluation result

        Raises:
            MathRulesEvalError: If evaluation fails
        """
        if isinstance(node, MathRulesConstantNode):
            return node.value

        if isinstance(node, MathRulesParameterNode):
            return self._evaluate_parameter(node, parameters)

        if isinstance(node, MathRulesConditionNode):
            return self._evaluate_condition(node, context, parameters)

        if isinstance(node, MathRulesApplyNode):
            return self._evaluate_apply(node, context, parameters)

        if isinstance(node, MathRulesMapNode):
            return self._evaluate_map(node, context, parameters)

        if isinstance(node, MathRulesReduceNode):
            return self._evaluate_reduce(node, context, parameters)

        raise MathRulesInvalidParametersError(
            message=f"Invalid node type: {type(node).__name__}",
            expected="Constant, parameter, condition, apply, map or reduce node"
        )

    def _evaluate_parameter(self, node: MathRulesParameterNode, parameters: Sequence[MathRulesValue]) -> MathRulesValue:
        """Return the referenced actual parameter."""
        # The builder guarantees valid indices; hand-built trees may not
        if not 0 <= node.index < len(parameters):
            raise MathRulesInvalidParametersError(
                message=f"Parameter index ${node.index} is out of range",
                received=f"{len(parameters)} parameters"
            )

        return parameters[node.index]

    def _evaluate_condition(
        self,
        node: MathRulesConditionNode,
        context: MathRulesContext,
        parameters: Sequence[MathRulesValue]
    ) -> MathRulesValue:
        """Evaluate the test, then only the selected branch."""
        test = self.evaluate(node.test, context, parameters)
        if not isinstance(test, MathRulesBoolean):
            raise MathRulesInvalidTypeError(
                message="Condition test must be a boolean",
                received=f"{test.describe()} ({test.type_name()})",
                expected="boolean",
                suggestion="Use a comparison such as <=, == or >= as the test"
            )

        branch = node.if_true if test.value else node.if_false
        return self.evaluate(branch, context, parameters)

    def _evaluate_apply(
        self,
        node: MathRulesApplyNode,
        context: MathRulesContext,
        parameters: Sequence[MathRulesValue]
    ) -> MathRulesValue:
        """Resolve the callee, evaluate arguments left to right, then call."""
        overloads = context.library.overloads(node.name)
        if not overloads:
            raise MathRulesUnknownFunctionError(node.name)

        fallback = context.lookup_arity(node.name, len(node.arguments))
        if fallback is None:
            raise MathRulesInvalidParametersError(
                message=(
                    f"Function '{node.name}' expects {overloads[0].parameter_count} arguments, "
                    f"got {len(node.arguments)}"
                ),
                expected=f"Parameters: {overloads[0].describe_parameters()}"
            )

        arguments = [self.evaluate(child, context, parameters) for child in node.arguments]
        return self._call(context, node.name, arguments, fallback)

    def _evaluate_map(
        self,
        node: MathRulesMapNode,
        context: MathRulesContext,
        parameters: Sequence[MathRulesValue]
    ) -> MathRulesValue:
        """Apply a unary function to every element, in order, failing on the first error."""
        function = context.lookup_arity(node.name, 1)
        if function is None:
            raise MathRulesUnknownFunctionError(node.name, expected="A function with exactly 1 parameter")

        list_value = self._ensure_list(self.evaluate(node.list_node, context, parameters), "map")

        results = [self._call(context, node.name, [element], function) for element in list_value.elements]
        return MathRulesList(tuple(results))

    def _evaluate_reduce(
        self,
        node: MathRulesReduceNode,
        context: MathRulesContext,
        parameters: Sequence[MathRulesValue]
    ) -> MathRulesValue:
        """Left-fold a binary function over a list, starting from the initial value."""
        function = context.lookup_arity(node.name, 2)
        if function is None:
            raise MathRulesUnknownFunctionError(node.name, expected="A function with exactly 2 parameters")

        accumulator = self.evaluate(node.initial_node, context, parameters)
        list_value = self._ensure_list(self.evaluate(node.list_node, context, parameters), "reduce")

        for element in list_value.elements:
            accumulator = self._call(context, node.name, [accumulator, element], function)

        return accumulator

    def _call(
        self,
        context: MathRulesContext,
        name: str,
        arguments: List[MathRulesValue],
        fallback: MathRulesFunction
    ) -> MathRulesValue:
        """
        Call the best overload for the actual arguments.

        When no overload accepts the argument types, the fallback (the first
        overload with the right arity) is called so that its own type checks
        report the problem.
        """
        function = context.lookup(name, arguments) or fallback
        return function.evaluate(context, arguments)

    def _ensure_list(self, value: MathRulesValue, operator_name: str) -> MathRulesList:
        """Require a list operand."""
        if not isinstance(value, MathRulesList):
            raise MathRulesInvalidTypeError(
                message=f"The {operator_name} operand must be a list",
                received=f"{value.describe()} ({value.type_name()})",
                expected="list"
            )

        return value
