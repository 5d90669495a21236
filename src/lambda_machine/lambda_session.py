"""Evaluation session controls and the top-level reduction loops."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

from lambda_machine.lambda_error import LambdaEvalError, LambdaFault


@dataclass(frozen=True)
class LambdaSession:
    """
    Controls read by the reduction engine on every application step.

    A session is configured once before evaluation begins and is passed by reference into
    every `reduce()` call, so it is frozen: nothing can change the reduction mode or the
    callback halfway through a reduction.

    Attributes:
        single_step: If True, an application whose left side is not yet normal performs one
            step on it and returns, so each call to `reduce()` is one visible head step.
            If False, the left side is driven to normal form before every application.
        application_callback: Called with (left, right) just before each application
            is performed, for tracing and instrumentation.
    """
    single_step: bool = False
    application_callback: Optional[Callable[[Any, Any], None]] = None

    _logger = logging.getLogger("LambdaSession")

    def normalize(self, node: Any, max_steps: int | None = None) -> Any:
        """
        Reduce a live node to normal form.

        Args:
            node: Live node to reduce
            max_steps: Maximum number of top-level `reduce()` calls, or None for no limit

        Returns:
            The normal form reached

        Raises:
            LambdaEvalError: If the step limit is exceeded or the reduction nests too deeply
            LambdaFault: If the graph is internally inconsistent
        """
        self._logger.debug("Normalizing %r (single_step=%s)", node, self.single_step)
        count = 0
        while not node.is_normal():
            self._check_step_limit(count, max_steps)
            node = self._reduce_once(node)
            count += 1

        self._logger.debug("Reached normal form %r after %d steps", node, count)
        return node

    def steps(self, node: Any, max_steps: int | None = None) -> Iterator[Any]:
        """
        Reduce a live node, yielding every state along the way.

        The first value yielded is the node itself and the last one is its normal form.
        Stopping iteration early leaves the graph partially reduced but safe to resume.

        Args:
            node: Live node to reduce
            max_steps: Maximum number of top-level `reduce()` calls, or None for no limit

        Yields:
            Successive reduction states
        """
        count = 0
        yield node
        while not node.is_normal():
            self._check_step_limit(count, max_steps)
            node = self._reduce_once(node)
            count += 1
            yield node

    def _reduce_once(self, node: Any) -> Any:
        try:
            return node.reduce(self)

        except LambdaFault as e:
            self._logger.critical("Internal fault during reduction: %s", e.message)
            raise

        except RecursionError as e:
            raise LambdaEvalError(
                "Reduction nested too deeply",
                context="The reduction exceeded the interpreter's recursion limit",
                suggestion="The term may not have a normal form; check recursive definitions for a base case"
            ) from e

    @staticmethod
    def _check_step_limit(count: int, max_steps: int | None) -> None:
        if max_steps is not None and count >= max_steps:
            raise LambdaEvalError(
                f"Step limit of {max_steps} exceeded",
                suggestion="Increase max_steps, or check that the term has a normal form"
            )


DEFAULT_SESSION = LambdaSession()
