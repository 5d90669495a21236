"""Persistent environment chains for captured values."""

from dataclasses import dataclass
from typing import Any, Iterator

from lambda_machine.lambda_error import LambdaFault


@dataclass(frozen=True, eq=False)
class LambdaEnvironment:
    """
    Immutable linked stack of captured values.

    Pushing returns a new head that shares this chain as its suffix, so any number of
    closures and applications can hold environments built from the same frames without
    copying them.  Positions are resolved by the compiler, so lookups are by depth only.
    """
    value: Any = None  # LambdaNode, avoiding circular import
    rest: 'LambdaEnvironment | None' = None
    depth: int = 0

    def is_empty(self) -> bool:
        """Check if this environment holds no frames."""
        return self.depth == 0

    def push(self, value: Any) -> 'LambdaEnvironment':
        """
        Return a new environment with a value on top.

        Args:
            value: Live node to capture

        Returns:
            New environment whose rest is this environment
        """
        return LambdaEnvironment(value, self, self.depth + 1)

    def drop(self, n: int) -> 'LambdaEnvironment':
        """
        Skip the innermost frames of this environment.

        Args:
            n: Number of frames to discard

        Returns:
            The environment reached after skipping n links

        Raises:
            LambdaFault: If the chain is shorter than n
        """
        if n < 0 or n > self.depth:
            raise LambdaFault(f"environment drop: cannot drop {n} frames from an environment of depth {self.depth}")

        env = self
        for _ in range(n):
            assert env.rest is not None
            env = env.rest

        return env

    def top(self) -> Any:
        """
        Get the innermost captured value.

        Raises:
            LambdaFault: If the environment is empty
        """
        if self.depth == 0:
            raise LambdaFault("variable occurrence: no environment values")

        return self.value

    def __len__(self) -> int:
        return self.depth

    def __iter__(self) -> Iterator[Any]:
        """Iterate over captured values, innermost first."""
        env = self
        while env.depth > 0:
            yield env.value
            assert env.rest is not None
            env = env.rest

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"LambdaEnvironment(depth={self.depth})"


EMPTY_ENVIRONMENT = LambdaEnvironment()
