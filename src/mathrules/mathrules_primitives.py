"""Predefined (primitive) functions for MathRules."""

import math
from typing import TYPE_CHECKING, Callable, List

from mathrules.mathrules_error import MathRulesInvalidTypeError
from mathrules.mathrules_function import MathRulesFunction, MathRulesParameter
from mathrules.mathrules_value import MathRulesBoolean, MathRulesInteger, MathRulesReal, MathRulesType, MathRulesValue

if TYPE_CHECKING:
    from mathrules.mathrules_context import MathRulesContext


REAL = MathRulesType.REAL
INTEGER = MathRulesType.INTEGER
BOOLEAN = MathRulesType.BOOLEAN


class MathRulesPrimitives:
    """
    Predefined functions for MathRules.

    Every primitive has a fixed arity and a declared signature.  Real
    parameters accept integers (widened to real); integer parameters accept
    integers only.  Results are always reals or booleans, and real results
    follow IEEE 754: overflow, poles and domain errors produce infinities or
    nan rather than exceptions.
    """

    def get_functions(self) -> List[MathRulesFunction]:
        """Return all predefined functions, in catalog order."""
        return self.constant_functions() + self.arithmetic_functions() + self.exponential_functions() + \
            self.logarithmic_functions() + self.comparison_functions()

    def constant_functions(self) -> List[MathRulesFunction]:
        """Return the predefined constants."""
        return [
            self._primitive('pi', (), REAL, self._builtin_pi),
        ]

    def arithmetic_functions(self) -> List[MathRulesFunction]:
        """Return the arithmetic and power functions."""
        binary = (('lhs', REAL), ('rhs', REAL))
        return [
            self._primitive('+', binary, REAL, self._builtin_plus),
            self._primitive('-', binary, REAL, self._builtin_minus),
            self._primitive('*', binary, REAL, self._builtin_star),
            self._primitive('/', binary, REAL, self._builtin_slash),
            self._primitive('sqr', (('value', REAL),), REAL, self._builtin_sqr),
            self._primitive('sqrt', (('value', REAL),), REAL, self._builtin_sqrt),
            self._primitive('power', (('base', REAL), ('exponent', REAL)), REAL, self._builtin_power),
            self._primitive('powern', (('base', REAL), ('exponent', INTEGER)), REAL, self._builtin_powern),
            self._primitive('root', (('value', REAL), ('n', INTEGER)), REAL, self._builtin_root),
        ]

    def exponential_functions(self) -> List[MathRulesFunction]:
        """Return the exponential functions."""
        unary = (('value', REAL),)
        return [
            self._primitive('exp', unary, REAL, self._builtin_exp),
            self._primitive('exp2', unary, REAL, self._builtin_exp2),
            self._primitive('exp10', unary, REAL, self._builtin_exp10),
        ]

    def logarithmic_functions(self) -> List[MathRulesFunction]:
        """Return the logarithmic functions."""
        unary = (('value', REAL),)
        return [
            self._primitive('log', unary, REAL, self._builtin_log),
            self._primitive('log2', unary, REAL, self._builtin_log2),
            self._primitive('log10', unary, REAL, self._builtin_log10),
        ]

    def comparison_functions(self) -> List[MathRulesFunction]:
        """Return the comparison functions."""
        binary = (('lhs', REAL), ('rhs', REAL))
        return [
            self._primitive('<=', binary, BOOLEAN, self._builtin_lte),
            self._primitive('==', binary, BOOLEAN, self._builtin_eq),
            self._primitive('>=', binary, BOOLEAN, self._builtin_gte),
        ]

    def _primitive(
        self,
        name: str,
        parameters: tuple,
        return_type: MathRulesType,
        impl: Callable[[List[MathRulesValue], 'MathRulesContext'], MathRulesValue]
    ) -> MathRulesFunction:
        """Create a predefined function from a name, (name, type) pairs and an implementation."""
        return MathRulesFunction(
            name=name,
            parameters=tuple(MathRulesParameter(param_name, param_type) for param_name, param_type in parameters),
            return_type=return_type,
            body=impl,
            is_predefined=True
        )

    def _ensure_real(self, value: MathRulesValue, function_name: str) -> float:
        """Extract a real number, widening integers."""
        if isinstance(value, MathRulesReal):
            return value.value

        if isinstance(value, MathRulesInteger):
            return float(value.value)

        raise MathRulesInvalidTypeError(
            message=f"Function '{function_name}' requires real arguments",
            received=f"{value.describe()} ({value.type_name()})",
            expected="real or integer"
        )

    def _ensure_integer(self, value: MathRulesValue, function_name: str) -> int:
        """Extract an integer; reals are not narrowed."""
        if isinstance(value, MathRulesInteger):
            return value.value

        raise MathRulesInvalidTypeError(
            message=f"Function '{function_name}' requires an integer argument",
            received=f"{value.describe()} ({value.type_name()})",
            expected="integer"
        )

    def _divide(self, lhs: float, rhs: float) -> float:
        """IEEE 754 division: a zero divisor gives a signed infinity, or nan for 0/0."""
        if rhs == 0:
            if lhs == 0 or math.isnan(lhs):
                return math.nan

            return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)

        return lhs / rhs

    def _power(self, base: float, exponent: float) -> float:
        """IEEE 754 pow: overflow gives infinity, poles give infinity and domain errors give nan."""
        odd_integer = math.isfinite(exponent) and exponent.is_integer() and exponent % 2 == 1

        try:
            return math.pow(base, exponent)

        except OverflowError:
            return -math.inf if base < 0 and odd_integer else math.inf

        except ValueError:
            # pow(0, negative) is a pole, anything else is a negative base with a fractional exponent
            if base == 0:
                return math.copysign(math.inf, base) if odd_integer else math.inf

            return math.nan

    # Constants
    def _builtin_pi(self, _args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement pi constant."""
        return MathRulesReal(math.pi)

    # Arithmetic operations
    def _builtin_plus(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement + operation."""
        return MathRulesReal(self._ensure_real(args[0], "+") + self._ensure_real(args[1], "+"))

    def _builtin_minus(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement - operation."""
        return MathRulesReal(self._ensure_real(args[0], "-") - self._ensure_real(args[1], "-"))

    def _builtin_star(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement * operation."""
        return MathRulesReal(self._ensure_real(args[0], "*") * self._ensure_real(args[1], "*"))

    def _builtin_slash(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement / operation."""
        return MathRulesReal(self._divide(self._ensure_real(args[0], "/"), self._ensure_real(args[1], "/")))

    # Power functions
    def _builtin_sqr(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement sqr function."""
        value = self._ensure_real(args[0], "sqr")
        return MathRulesReal(value * value)

    def _builtin_sqrt(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement sqrt function."""
        value = self._ensure_real(args[0], "sqrt")
        if value < 0:
            return MathRulesReal(math.nan)

        return MathRulesReal(math.sqrt(value))

    def _builtin_power(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement power function (real exponent)."""
        base = self._ensure_real(args[0], "power")
        exponent = self._ensure_real(args[1], "power")
        return MathRulesReal(self._power(base, exponent))

    def _builtin_powern(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement powern function (integer exponent)."""
        base = self._ensure_real(args[0], "powern")
        exponent = self._ensure_integer(args[1], "powern")
        return MathRulesReal(self._power(base, float(exponent)))

    def _builtin_root(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement root function (n-th root)."""
        value = self._ensure_real(args[0], "root")
        n = self._ensure_integer(args[1], "root")

        if n == 0:
            return MathRulesReal(math.nan)

        # Odd roots of negative numbers are real
        if value < 0 and n % 2 == 1:
            return MathRulesReal(-self._power(-value, 1.0 / n))

        return MathRulesReal(self._power(value, 1.0 / n))

    # Exponential functions
    def _builtin_exp(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement exp function."""
        value = self._ensure_real(args[0], "exp")
        try:
            return MathRulesReal(math.exp(value))

        except OverflowError:
            return MathRulesReal(math.inf)

    def _builtin_exp2(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement exp2 function."""
        return MathRulesReal(self._power(2.0, self._ensure_real(args[0], "exp2")))

    def _builtin_exp10(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement exp10 function."""
        return MathRulesReal(self._power(10.0, self._ensure_real(args[0], "exp10")))

    # Logarithmic functions
    def _log(self, value: float, log_impl: Callable[[float], float]) -> MathRulesReal:
        """Shared logarithm logic: log(0) is -inf, negative arguments give nan."""
        if value == 0:
            return MathRulesReal(-math.inf)

        if value < 0:
            return MathRulesReal(math.nan)

        return MathRulesReal(log_impl(value))

    def _builtin_log(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement log (natural logarithm) function."""
        return self._log(self._ensure_real(args[0], "log"), math.log)

    def _builtin_log2(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement log2 function."""
        return self._log(self._ensure_real(args[0], "log2"), math.log2)

    def _builtin_log10(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement log10 function."""
        return self._log(self._ensure_real(args[0], "log10"), math.log10)

    # Comparison operations
    def _builtin_lte(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement <= (less than or equal) operation."""
        return MathRulesBoolean(self._ensure_real(args[0], "<=") <= self._ensure_real(args[1], "<="))

    def _builtin_eq(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement == (numeric equality) operation."""
        return MathRulesBoolean(self._ensure_real(args[0], "==") == self._ensure_real(args[1], "=="))

    def _builtin_gte(self, args: List[MathRulesValue], _context: 'MathRulesContext') -> MathRulesValue:
        """Implement >= (greater than or equal) operation."""
        return MathRulesBoolean(self._ensure_real(args[0], ">=") >= self._ensure_real(args[1], ">="))
