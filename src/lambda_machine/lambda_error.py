"""Exception classes for the lambda machine.

Two tiers are kept apart: `LambdaError` and its subclasses are user-facing errors that carry
source metadata for reporting, while `LambdaFault` signals that a compiled template or the
globals table is internally inconsistent and evaluation cannot continue.
"""

import difflib
from typing import Any, Optional


class LambdaError(Exception):
    """Base exception for user-facing lambda machine errors with detailed context information."""

    def __init__(
        self,
        message: str,
        context: Optional[str] = None,
        expected: Optional[str] = None,
        received: Optional[str] = None,
        suggestion: Optional[str] = None,
        example: Optional[str] = None,
        meta: Any = None
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
            meta: Opaque source metadata of the offending node, if any
        """
        self.message = message
        self.context = context
        self.expected = expected
        self.received = received
        self.suggestion = suggestion
        self.example = example
        self.meta = meta

        super().__init__(self._format_detailed_message())

    def location(self) -> Optional[str]:
        """
        Describe where the error occurred.

        Metadata is opaque to the machine, so only objects that look like source positions
        (having `filename`, `line` and `column` attributes) produce a location.

        Returns:
            "file:line:column" text, or None if the metadata has no position
        """
        filename = getattr(self.meta, 'filename', None)
        line = getattr(self.meta, 'line', None)
        column = getattr(self.meta, 'column', None)
        if filename is None or line is None or column is None:
            return None

        return f"{filename}:{line}:{column}"

    def _format_detailed_message(self) -> str:
        """Format the error message with all available details."""
        parts = [f"Error: {self.message}"]

        location = self.location()
        if location is not None:
            parts.append(f"Location: {location}")

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


class LambdaLinkError(LambdaError):
    """Errors linking named globals: duplicates, undefined or never-defined names."""


class LambdaEvalError(LambdaError):
    """Errors raised while reducing a graph, such as a builtin receiving a bad operand."""


class LambdaFault(Exception):
    """
    Internal consistency fault.

    Raised when a template violates the positional invariants the compiler guarantees, when
    a slot is filled or read out of order, or when a normal value that is not applicable ends
    up on the left of an application. These are never user errors and are not
    part of the `LambdaError` hierarchy.
    """

    def __init__(self, message: str, meta: Any = None):
        self.message = message
        self.meta = meta
        super().__init__(f"Internal fault: {message}")


def suggest_similar_names(target: str, available: list[str], max_suggestions: int = 3) -> list[str]:
    """Suggest similar global names using fuzzy matching."""
    if not target or not available:
        return []

    return difflib.get_close_matches(target, available, n=max_suggestions, cutoff=0.6)
