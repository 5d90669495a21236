"""Compiled templates - environment-agnostic terms produced by the external compiler.

Variables have already been resolved to positions: a variable occurrence always refers to
the innermost frame, and applications say how many frames to drop before materializing
each side.  Templates are immutable; materializing one against an environment builds the
corresponding live node.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from lambda_machine.lambda_environment import LambdaEnvironment
from lambda_machine.lambda_error import LambdaFault
from lambda_machine.lambda_node import LambdaApplication, LambdaClosure, LambdaIndirection, LambdaNode
from lambda_machine.lambda_slot import LambdaSlot


class LambdaTemplate(ABC):
    """Abstract base class for all compiled templates."""

    meta: Any = None

    @abstractmethod
    def materialize(self, env: LambdaEnvironment) -> LambdaNode:
        """
        Build the live node for this template.

        Args:
            env: Environment whose frames the template's positions refer to

        Returns:
            Live node bound to env
        """


@dataclass(frozen=True)
class LambdaVarOccurrence(LambdaTemplate):
    """Occurrence of the variable bound by the innermost frame."""
    meta: Any = field(default=None, compare=False)

    def materialize(self, env: LambdaEnvironment) -> LambdaNode:
        if env.is_empty():
            raise LambdaFault("variable occurrence: no environment values", self.meta)

        value: LambdaNode = env.top()
        return value


@dataclass(frozen=True)
class LambdaGlobalRef(LambdaTemplate):
    """Reference to a global's slot; globals capture nothing, so the environment must be empty."""
    slot: LambdaSlot
    meta: Any = field(default=None, compare=False)

    def materialize(self, env: LambdaEnvironment) -> LambdaNode:
        if not env.is_empty():
            raise LambdaFault(f"global reference: environment not empty (depth {env.depth})", self.meta)

        return LambdaIndirection(self.slot, self.meta)


@dataclass(frozen=True)
class LambdaAbstractionBody(LambdaTemplate):
    """
    Template for a closure.

    Attributes:
        param_used: Whether the body refers to the parameter; if not, applying the closure
            does not extend its environment
        body: Template materialized when the closure is applied
    """
    param_used: bool
    body: LambdaTemplate
    meta: Any = field(default=None, compare=False)

    def materialize(self, env: LambdaEnvironment) -> LambdaNode:
        return LambdaClosure(env, self.param_used, self.body, self.meta)


@dataclass(frozen=True)
class LambdaApplicationTemplate(LambdaTemplate):
    """
    Template for an application.

    Attributes:
        left_drop: Frames to discard before materializing the left side
        right_drop: Frames to discard before materializing the right side
        left: Operator template
        right: Operand template
    """
    left_drop: int
    right_drop: int
    left: LambdaTemplate
    right: LambdaTemplate
    meta: Any = field(default=None, compare=False)

    def materialize(self, env: LambdaEnvironment) -> LambdaNode:
        left_env = env.drop(self.left_drop)
        right_env = env.drop(self.right_drop)
        left = self.left.materialize(left_env)
        right = self.right.materialize(right_env)
        return LambdaApplication(left, right, self.meta)
