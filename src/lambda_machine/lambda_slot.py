"""Indirection slots holding the current value of a global definition."""

from typing import Any

from lambda_machine.lambda_error import LambdaFault


class LambdaSlot:
    """
    Shared, externally owned cell for a global's value.

    Slots are allocated before the template that defines them is compiled, which lets
    definitions refer to themselves and to each other.  A slot is filled exactly once.
    """

    def __init__(self, name: str | None = None, meta: Any = None) -> None:
        """
        Initialize an empty slot.

        Args:
            name: Global name, used in diagnostics
            meta: Opaque source metadata of the definition
        """
        self.name = name
        self.meta = meta
        self._value: Any = None  # LambdaNode, avoiding circular import

    @classmethod
    def constant(cls, value: Any, name: str | None = None) -> 'LambdaSlot':
        """
        Create an anonymous slot already holding a value.

        This is how compiled templates embed literals: a `LambdaGlobalRef` to a constant slot.

        Args:
            value: Live node to hold
            name: Optional display name

        Returns:
            Filled slot
        """
        slot = cls(name)
        slot.fill(value)
        return slot

    def is_filled(self) -> bool:
        """Check if the slot has been given its value."""
        return self._value is not None

    def fill(self, value: Any) -> None:
        """
        Give the slot its value.

        Raises:
            LambdaFault: If the slot was already filled
        """
        if self._value is not None:
            raise LambdaFault(f"slot '{self._display_name()}' filled twice", self.meta)

        self._value = value

    def get(self) -> Any:
        """
        Get the slot's current value.

        Raises:
            LambdaFault: If the slot has not been filled yet
        """
        if self._value is None:
            raise LambdaFault(f"slot '{self._display_name()}' read before it was filled", self.meta)

        return self._value

    def _display_name(self) -> str:
        return self.name if self.name is not None else "<anonymous>"

    def __repr__(self) -> str:
        state = "filled" if self._value is not None else "empty"
        return f"LambdaSlot({self._display_name()}: {state})"
