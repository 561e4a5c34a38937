"""Exception classes for MathRules with detailed context."""

from typing import Any


class MathRulesError(Exception):
    """Base exception for MathRules errors with detailed context information."""

    def __init__(
        self,
        message: str,
        context: str | None = None,
        expected: str | None = None,
        received: str | None = None,
        suggestion: str | None = None,
        example: str | None = None
    ):
        """
        Initialize detailed error.

        Args:
            message: Core error description
            context: Additional context information
            expected: What was expected
            received: What was actually received
            suggestion: Suggestion for fixing the error
            example: Example of correct usage
        """
        self.message = message
        self.context = context
        self.expected = expected
        self.received = received
        self.suggestion = suggestion
        self.example = example

        super().__init__(self._format_detailed_message())

    def _format_detailed_message(self) -> str:
        """Format the error message with all available details."""
        parts = [f"Error: {self.message}"]

        if self.received:
            parts.append(f"Received: {self.received}")

        if self.expected:
            parts.append(f"Expected: {self.expected}")

        if self.context:
            parts.append(f"Context: {self.context}")

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        if self.example:
            parts.append(f"Example: {self.example}")

        return "\n".join(parts)


class MathRulesFunctionError(MathRulesError):
    """Errors raised while building or registering functions."""


class MathRulesEvalError(MathRulesError):
    """Errors raised while evaluating functions."""


class MathRulesInvalidInstructionsError(MathRulesFunctionError):
    """The instruction stream does not reduce to exactly one node."""

    def __init__(self, message: str = "Invalid instructions", **kwargs: Any):
        kwargs.setdefault(
            "suggestion", "Every instruction must find its operands on the stack and exactly one node must remain"
        )
        super().__init__(message=message, **kwargs)


class MathRulesInvalidParameterIndexError(MathRulesFunctionError):
    """A parameter reference is negative or leaves a gap in the parameter slots."""

    def __init__(self, index: int, **kwargs: Any):
        """
        Initialize invalid parameter index error.

        Args:
            index: The offending parameter index
            **kwargs: Additional error context
        """
        self.index = index

        super().__init__(
            message=f"Invalid parameter index: {index}",
            suggestion="Parameter indices must be contiguous and start at 0",
            **kwargs
        )


class MathRulesDuplicateFunctionError(MathRulesFunctionError):
    """Registration would override a predefined function."""

    def __init__(self, name: str, **kwargs: Any):
        """
        Initialize duplicate function error.

        Args:
            name: Name of the function that could not be registered
            **kwargs: Additional error context
        """
        self.name = name

        super().__init__(
            message=f"Duplicate function: '{name}'",
            context="A predefined function with the same parameter types already exists",
            suggestion="Use a different name or different parameter types",
            **kwargs
        )


class MathRulesUndefinedFunctionError(MathRulesFunctionError):
    """An instruction names a function that is absent or has the wrong arity."""

    def __init__(self, name: str, **kwargs: Any):
        """
        Initialize undefined function error.

        Args:
            name: Name of the function that could not be resolved
            **kwargs: Additional error context
        """
        self.name = name

        super().__init__(
            message=f"Undefined function: '{name}'",
            **kwargs
        )


class MathRulesInvalidTypeError(MathRulesEvalError):
    """A value does not have the type an operation requires."""

    def __init__(self, message: str = "Invalid type", **kwargs: Any):
        super().__init__(message=message, **kwargs)


class MathRulesInvalidParametersError(MathRulesEvalError):
    """Wrong number of arguments, or a malformed node."""

    def __init__(self, message: str = "Invalid parameters", **kwargs: Any):
        super().__init__(message=message, **kwargs)


class MathRulesUnknownFunctionError(MathRulesEvalError):
    """A function name no longer resolves at evaluation time."""

    def __init__(self, name: str, **kwargs: Any):
        """
        Initialize unknown function error.

        Args:
            name: Name of the function that could not be resolved
            **kwargs: Additional error context
        """
        self.name = name

        super().__init__(
            message=f"Unknown function: '{name}'",
            **kwargs
        )


class MathRulesRuntimeError(MathRulesEvalError):
    """A function body failed at run time; raised by host-supplied functions, never by the predefined catalog."""
