"""Function library for MathRules: name-based registration and overload resolution."""

import logging
from typing import Dict, Iterator, List, Sequence, Tuple

from mathrules.mathrules_error import MathRulesDuplicateFunctionError
from mathrules.mathrules_function import MathRulesFunction
from mathrules.mathrules_primitives import MathRulesPrimitives
from mathrules.mathrules_value import MathRulesValue


class MathRulesLibrary:
    """
    Registry mapping function names to one or more overloaded functions.

    Overloads sharing a name are kept in registration order.  At most one
    predefined function exists per (name, parameter types); user-defined
    functions may replace earlier user-defined overloads with the same
    parameter types but never a predefined one.

    The library is a single-owner structure: registrations and evaluations
    must not interleave across threads without external locking.
    """

    def __init__(self, include_predefined: bool = True) -> None:
        """
        Initialize the library.

        Args:
            include_predefined: Register the predefined function catalog

        Raises:
            MathRulesDuplicateFunctionError: If the predefined catalog contains duplicates
        """
        self._logger = logging.getLogger("MathRulesLibrary")
        self._functions: Dict[str, List[MathRulesFunction]] = {}

        if include_predefined:
            # Build into a scratch library first so construction is all-or-nothing
            functions: Dict[str, List[MathRulesFunction]] = {}
            for function in MathRulesPrimitives().get_functions():
                self._insert(functions, function)

            self._functions = functions

    def _insert(self, functions: Dict[str, List[MathRulesFunction]], function: MathRulesFunction) -> None:
        """
        Insert a function into an overload table following the registration rules.

        Args:
            functions: Overload table to update
            function: Function to insert

        Raises:
            MathRulesDuplicateFunctionError: If an overload with the same parameter types is predefined
        """
        overloads = functions.setdefault(function.name, [])

        for i, existing in enumerate(overloads):
            if existing.distance(function.parameter_types) != 0:
                continue

            if existing.is_predefined:
                self._logger.warning(
                    "Rejected registration of '%s': predefined overload %s exists",
                    function.name, existing.describe()
                )
                raise MathRulesDuplicateFunctionError(
                    function.name,
                    received=function.describe(),
                    expected=f"Parameter types other than those of {existing.describe()}"
                )

            # Replace in place so overload order stays stable
            overloads[i] = function
            self._logger.debug("Replaced function %s", function.describe())
            return

        overloads.append(function)
        self._logger.debug("Registered function %s", function.describe())

    def register(self, function: MathRulesFunction) -> None:
        """
        Register a function.

        A user-defined overload with the same name and parameter types as an
        earlier user-defined overload replaces it.

        Args:
            function: Function to register

        Raises:
            MathRulesDuplicateFunctionError: If the function would override a predefined overload
        """
        self._insert(self._functions, function)

    def unregister(self, function: MathRulesFunction) -> bool:
        """
        Remove one user-defined overload.

        Args:
            function: The exact function object to remove

        Returns:
            True if the function was registered and has been removed
        """
        if function.is_predefined:
            return False

        overloads = self._functions.get(function.name, [])
        for i, existing in enumerate(overloads):
            if existing is function:
                del overloads[i]
                if not overloads:
                    del self._functions[function.name]

                self._logger.debug("Unregistered function %s", function.describe())
                return True

        return False

    def lookup(self, name: str, arguments: Sequence[MathRulesValue] | None = None) -> MathRulesFunction | None:
        """
        Look up a function by name, optionally resolving overloads against actual arguments.

        Without arguments the first-registered overload is returned; the tree
        builder uses it to determine arity.  With arguments the overload with
        the smallest finite distance wins, and equal distances resolve to the
        earliest-registered overload.

        Args:
            name: Function name
            arguments: Actual argument values, or None for the default overload

        Returns:
            The selected function, or None if no overload matches
        """
        overloads = self._functions.get(name)
        if not overloads:
            return None

        if arguments is None:
            return overloads[0]

        argument_types = [argument.type_tag() for argument in arguments]
        best: MathRulesFunction | None = None
        best_distance: int | None = None
        for function in overloads:
            distance = function.distance(argument_types)
            if distance is None:
                continue

            # Strict comparison keeps the earliest overload on ties
            if best_distance is None or distance < best_distance:
                best = function
                best_distance = distance

        return best

    def lookup_arity(self, name: str, arity: int) -> MathRulesFunction | None:
        """
        Look up the first-registered overload of a name that declares a given number of parameters.

        Args:
            name: Function name
            arity: Required parameter count

        Returns:
            The matching function, or None
        """
        for function in self._functions.get(name, []):
            if function.parameter_count == arity:
                return function

        return None

    def overloads(self, name: str) -> Tuple[MathRulesFunction, ...]:
        """Return all overloads registered under a name, in registration order."""
        return tuple(self._functions.get(name, ()))

    def names(self) -> List[str]:
        """Return all registered function names."""
        return list(self._functions.keys())

    def __getitem__(self, key: str | Tuple[str, Sequence[MathRulesValue]]) -> MathRulesFunction:
        """
        Subscript access: library[name] or library[name, arguments].

        Raises:
            KeyError: If no overload matches
        """
        if isinstance(key, tuple):
            name, arguments = key
            function = self.lookup(name, arguments)

        else:
            name = key
            function = self.lookup(name)

        if function is None:
            raise KeyError(name)

        return function

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __iter__(self) -> Iterator[MathRulesFunction]:
        for overloads in self._functions.values():
            yield from overloads

    def __len__(self) -> int:
        """Number of distinct function names."""
        return len(self._functions)

    def __repr__(self) -> str:
        return f"MathRulesLibrary(names={len(self._functions)}, functions={sum(1 for _ in self)})"
