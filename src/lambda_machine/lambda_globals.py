"""Globals table: the owner of named indirection slots.

Linking happens in two phases.  Every global is declared first, which allocates its slot,
so the compiler can hand out references to any global, including the one being compiled.
Each definition is then materialized against the empty environment and its slot filled.
"""

import logging
from typing import Any, Dict, Iterator, List

from lambda_machine.lambda_environment import EMPTY_ENVIRONMENT
from lambda_machine.lambda_error import LambdaLinkError, suggest_similar_names
from lambda_machine.lambda_node import LambdaIndirection, LambdaNode
from lambda_machine.lambda_slot import LambdaSlot
from lambda_machine.lambda_template import LambdaGlobalRef, LambdaTemplate


class LambdaGlobals:
    """Arena of named global slots keyed by name."""

    def __init__(self) -> None:
        """Initialize an empty globals table."""
        self._slots: Dict[str, LambdaSlot] = {}
        self._logger = logging.getLogger("LambdaGlobals")

    def declare(self, name: str, meta: Any = None) -> LambdaSlot:
        """
        Allocate the slot for a global.

        Args:
            name: Global name
            meta: Opaque source metadata of the definition

        Returns:
            The new, empty slot

        Raises:
            LambdaLinkError: If the name is already declared
        """
        if name in self._slots:
            raise LambdaLinkError(
                f"'{name}' already defined",
                context="Each global may only be defined once",
                meta=meta
            )

        slot = LambdaSlot(name, meta)
        self._slots[name] = slot
        self._logger.debug("Declared global '%s'", name)
        return slot

    def slot(self, name: str, meta: Any = None) -> LambdaSlot:
        """
        Get the slot for a declared global.

        Args:
            name: Global name
            meta: Opaque source metadata of the referring node, for error reporting

        Raises:
            LambdaLinkError: If the name has not been declared
        """
        if name in self._slots:
            return self._slots[name]

        similar = suggest_similar_names(name, list(self._slots))
        suggestion = f"Did you mean {', '.join(repr(s) for s in similar)}?" if similar else None
        raise LambdaLinkError(
            f"'{name}' not defined",
            context=f"Undefined global referenced; {len(self._slots)} globals are defined",
            suggestion=suggestion,
            meta=meta
        )

    def reference(self, name: str, meta: Any = None) -> LambdaGlobalRef:
        """
        Build a template referring to a global.

        Args:
            name: Global name
            meta: Opaque source metadata of the referring occurrence

        Returns:
            Template that materializes to an indirection through the global's slot
        """
        return LambdaGlobalRef(self.slot(name, meta), meta)

    def define(self, name: str, template: LambdaTemplate) -> LambdaNode:
        """
        Materialize a global's defining template and fill its slot.

        Args:
            name: Declared global name
            template: Compiled, closed template

        Returns:
            The live node now held by the slot
        """
        slot = self.slot(name)
        node = template.materialize(EMPTY_ENVIRONMENT)
        slot.fill(node)
        self._logger.debug("Defined global '%s' as %r", name, node)
        return node

    def bind(self, name: str, node: LambdaNode) -> None:
        """
        Fill a global's slot with an existing live node, such as a builtin.

        Args:
            name: Declared global name
            node: Live node to hold
        """
        self.slot(name).fill(node)
        self._logger.debug("Bound global '%s' to %r", name, node)

    def entry(self, name: str) -> LambdaIndirection:
        """
        Get an evaluation entry point for a global.

        Args:
            name: Global name

        Returns:
            Indirection through the global's slot
        """
        slot = self.slot(name)
        return LambdaIndirection(slot, slot.meta)

    def check_complete(self) -> None:
        """
        Check that every declared global has been given a value.

        Raises:
            LambdaLinkError: For the first global declared but never defined
        """
        missing = [name for name, slot in self._slots.items() if not slot.is_filled()]
        if not missing:
            return

        raise LambdaLinkError(
            f"'{missing[0]}' declared but never defined",
            context=f"Globals without a definition: {', '.join(missing)}",
            meta=self._slots[missing[0]].meta
        )

    def names(self) -> List[str]:
        """Get all declared global names, in declaration order."""
        return list(self._slots)

    def __contains__(self, name: object) -> bool:
        return name in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"LambdaGlobals({len(self._slots)} globals)"
