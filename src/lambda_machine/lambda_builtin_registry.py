"""
Builtin registry for the lambda machine.

This module provides a single source of truth for the builtin values installed into a
globals table before user definitions are linked.
"""

from typing import Dict, List

from lambda_machine.lambda_builtins import INTEGER_COMPARISONS, INTEGER_OPERATIONS, LambdaBuiltin, LambdaIntOperator
from lambda_machine.lambda_globals import LambdaGlobals


class LambdaBuiltinRegistry:
    """Central registry for all builtin values."""

    # Canonical ordering of builtin names
    BUILTIN_TABLE = [
        '+', '-', '*', '/', '%',
        '==', '!=', '<', '>', '<=', '>=',
    ]

    def __init__(self) -> None:
        """Initialize the builtin registry."""
        self._builtins: Dict[str, LambdaBuiltin] = self._build_builtins()

    def _build_builtins(self) -> Dict[str, LambdaBuiltin]:
        """
        Build builtin nodes in BUILTIN_TABLE order.

        Returns:
            Dictionary mapping builtin names to builtin nodes
        """
        builtins: Dict[str, LambdaBuiltin] = {}
        for name in self.BUILTIN_TABLE:
            if name in INTEGER_OPERATIONS:
                builtins[name] = LambdaIntOperator(name, INTEGER_OPERATIONS[name], is_comparison=False, meta=name)
                continue

            if name in INTEGER_COMPARISONS:
                builtins[name] = LambdaIntOperator(name, INTEGER_COMPARISONS[name], is_comparison=True, meta=name)
                continue

            raise RuntimeError(f"Builtin '{name}' in BUILTIN_TABLE but not implemented")

        return builtins

    def get_all_names(self) -> List[str]:
        """
        Get list of all builtin names.

        Returns:
            List of builtin names in canonical order
        """
        return list(self._builtins.keys())

    def get_builtin(self, name: str) -> LambdaBuiltin:
        """
        Get a builtin node by name.

        Raises:
            KeyError: If the name is not a builtin
        """
        return self._builtins[name]

    def install(self, lambda_globals: LambdaGlobals) -> None:
        """
        Declare and bind every builtin in a globals table.

        Args:
            lambda_globals: Table to populate

        Raises:
            LambdaLinkError: If a builtin name is already declared in the table
        """
        for name, builtin in self._builtins.items():
            lambda_globals.declare(name, builtin.meta)
            lambda_globals.bind(name, builtin)
