"""MathRules package: an embeddable evaluator for small numeric functions built from RPN instructions."""

# Main API
from mathrules.mathrules import MathRules

# Exceptions (for error handling)
from mathrules.mathrules_error import (
    MathRulesError, MathRulesFunctionError, MathRulesEvalError,
    MathRulesInvalidInstructionsError, MathRulesInvalidParameterIndexError, MathRulesDuplicateFunctionError,
    MathRulesUndefinedFunctionError, MathRulesInvalidTypeError, MathRulesInvalidParametersError,
    MathRulesUnknownFunctionError, MathRulesRuntimeError
)

# Value types
from mathrules.mathrules_value import (
    MathRulesType, MathRulesValue, MathRulesBoolean, MathRulesInteger, MathRulesReal, MathRulesList, make_value
)

# Functions and the library
from mathrules.mathrules_function import MathRulesFunction, MathRulesParameter
from mathrules.mathrules_library import MathRulesLibrary
from mathrules.mathrules_context import MathRulesContext

# Lower-level components (for advanced usage)
from mathrules.mathrules_instruction import (
    MathRulesInstruction, MathRulesConst, MathRulesParam, MathRulesCond, MathRulesApply, MathRulesMap,
    MathRulesReduce
)
from mathrules.mathrules_node import (
    MathRulesNode, MathRulesConstantNode, MathRulesParameterNode, MathRulesConditionNode, MathRulesApplyNode,
    MathRulesMapNode, MathRulesReduceNode
)
from mathrules.mathrules_builder import MathRulesFunctionBuilder
from mathrules.mathrules_evaluator import MathRulesEvaluator
from mathrules.mathrules_primitives import MathRulesPrimitives


__all__ = [
    # Main API
    "MathRules",

    # Exceptions
    "MathRulesError", "MathRulesFunctionError", "MathRulesEvalError",
    "MathRulesInvalidInstructionsError", "MathRulesInvalidParameterIndexError", "MathRulesDuplicateFunctionError",
    "MathRulesUndefinedFunctionError", "MathRulesInvalidTypeError", "MathRulesInvalidParametersError",
    "MathRulesUnknownFunctionError", "MathRulesRuntimeError",

    # Value types
    "MathRulesType", "MathRulesValue", "MathRulesBoolean", "MathRulesInteger", "MathRulesReal", "MathRulesList",
    "make_value",

    # Functions and the library
    "MathRulesFunction", "MathRulesParameter", "MathRulesLibrary", "MathRulesContext",

    # Lower-level components
    "MathRulesInstruction", "MathRulesConst", "MathRulesParam", "MathRulesCond", "MathRulesApply", "MathRulesMap",
    "MathRulesReduce",
    "MathRulesNode", "MathRulesConstantNode", "MathRulesParameterNode", "MathRulesConditionNode",
    "MathRulesApplyNode", "MathRulesMapNode", "MathRulesReduceNode",
    "MathRulesFunctionBuilder", "MathRulesEvaluator", "MathRulesPrimitives"
]
