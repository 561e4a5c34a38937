"""Shared fixtures and utilities for MathRules tests."""

import pytest
from typing import Any, List

from mathrules import (
    MathRules, MathRulesContext, MathRulesFunction, MathRulesFunctionBuilder, MathRulesLibrary,
    MathRulesApply, MathRulesCond, MathRulesConst, MathRulesInstruction, MathRulesParam,
    MathRulesInteger, MathRulesValue, make_value
)


@pytest.fixture
def library():
    """Create a fresh library with the predefined catalog for each test."""
    return MathRulesLibrary()


@pytest.fixture
def context(library):
    """Create an evaluation context over the test library."""
    return MathRulesContext(library)


@pytest.fixture
def builder():
    """Create a function builder."""
    return MathRulesFunctionBuilder()


@pytest.fixture
def mathrules():
    """Create a fresh MathRules instance for each test."""
    return MathRules()


class MathRulesTestHelpers:
    """Helper utilities for MathRules testing."""

    @staticmethod
    def const(value: Any) -> MathRulesConst:
        """Shorthand for a constant instruction from a Python value."""
        return MathRulesConst(make_value(value))

    @staticmethod
    def factorial_instructions(name: str = "fac") -> List[MathRulesInstruction]:
        """Instructions for n <= 0 ? 1 : fac(n - 1) * n."""
        const = MathRulesTestHelpers.const
        return [
            MathRulesParam(0),
            const(0),
            MathRulesApply("<="),
            const(1),
            MathRulesParam(0),
            const(1),
            MathRulesApply("-"),
            MathRulesApply(name),
            MathRulesParam(0),
            MathRulesApply("*"),
            MathRulesCond(),
        ]

    @staticmethod
    def fibonacci_instructions(name: str = "fib") -> List[MathRulesInstruction]:
        """Instructions for n <= 0 ? 0 : (n == 1 ? 1 : fib(n - 1) + fib(n - 2))."""
        const = MathRulesTestHelpers.const
        return [
            MathRulesParam(0),
            const(0),
            MathRulesApply("<="),
            const(0),
            MathRulesParam(0),
            const(1),
            MathRulesApply("=="),
            const(1),
            MathRulesParam(0),
            const(1),
            MathRulesApply("-"),
            MathRulesApply(name),
            MathRulesParam(0),
            const(2),
            MathRulesApply("-"),
            MathRulesApply(name),
            MathRulesApply("+"),
            MathRulesCond(),
            MathRulesCond(),
        ]

    @staticmethod
    def register_recursive(
        builder: MathRulesFunctionBuilder,
        library: MathRulesLibrary,
        name: str,
        instructions: List[MathRulesInstruction],
        arity: int = 1
    ) -> MathRulesFunction:
        """Register a recursive function by hand: stub first, then the real body."""
        stub = MathRulesFunction(
            name=name,
            parameters=builder.infer_parameters([MathRulesParam(i) for i in range(arity)]),
            return_type=builder.GENERIC_TYPE,
            body=lambda _arguments, _context: MathRulesInteger(0)
        )
        library.register(stub)
        function = builder.build_function(name, instructions, library)
        library.register(function)
        return function

    @staticmethod
    def register_factorial(builder: MathRulesFunctionBuilder, library: MathRulesLibrary) -> MathRulesFunction:
        """Register the factorial function as 'fac' using stub-then-replace."""
        return MathRulesTestHelpers.register_recursive(
            builder, library, "fac", MathRulesTestHelpers.factorial_instructions()
        )

    @staticmethod
    def call(function: MathRulesFunction, context: MathRulesContext, *arguments: Any) -> MathRulesValue:
        """Evaluate a function with Python arguments."""
        return function.evaluate(context, [make_value(argument) for argument in arguments])


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return MathRulesTestHelpers
