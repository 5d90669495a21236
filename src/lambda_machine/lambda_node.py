"""Live graph nodes and the reduction engine.

A live graph is what templates materialize into.  It has three core kinds: indirections
to global slots, closures, and applications.  Applications rewrite themselves in place
once they have been applied (collapse), so every reference to the same application shares
the result.  Anything that can stand on the left of an application implements
`LambdaApplicable`; closures do, and host-supplied builtins are the one open extension.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable

from lambda_machine.lambda_environment import LambdaEnvironment
from lambda_machine.lambda_error import LambdaFault
from lambda_machine.lambda_session import DEFAULT_SESSION, LambdaSession
from lambda_machine.lambda_slot import LambdaSlot


class LambdaNode(ABC):
    """Abstract base class for all live graph nodes."""

    meta: Any = None

    @abstractmethod
    def is_normal(self) -> bool:
        """Check if this node admits no further reduction."""

    @abstractmethod
    def reduce(self, session: LambdaSession | None = None) -> 'LambdaNode':
        """
        Perform one reduction step.

        Callers loop `while not node.is_normal(): node = node.reduce(session)`.

        Args:
            session: Session controls, or None for the default bulk session

        Returns:
            The node to treat as the next state
        """

    @abstractmethod
    def type_name(self) -> str:
        """Return type name for error messages."""

    def describe(self, name_of: Callable[[Any], str]) -> str:
        """
        Display text for this node when rendered.

        The core node kinds are rendered from their metadata; builtins and literals override
        this to show themselves.

        Args:
            name_of: Maps metadata to display text
        """
        return name_of(self.meta)


class LambdaApplicable(LambdaNode):
    """A normal node that can serve as the left side of an application."""

    def is_normal(self) -> bool:
        return True

    def reduce(self, session: LambdaSession | None = None) -> LambdaNode:
        return self

    @abstractmethod
    def apply(self, arg: LambdaNode, session: LambdaSession | None = None) -> LambdaNode:
        """
        Apply this value to an argument.

        Args:
            arg: The (unreduced) argument node
            session: Session controls, for applicables that force their operands

        Returns:
            The live node the application reduces to
        """


class LambdaIndirection(LambdaNode):
    """One dereference away from a global's current value."""

    def __init__(self, slot: LambdaSlot, meta: Any = None) -> None:
        self.slot = slot
        self.meta = meta

    def is_normal(self) -> bool:
        return False

    def reduce(self, session: LambdaSession | None = None) -> LambdaNode:
        # The slot may have been filled after this node was created.
        value: LambdaNode = self.slot.get()
        return value

    def type_name(self) -> str:
        return "indirection"

    def __repr__(self) -> str:
        return f"LambdaIndirection({self.slot!r})"


class LambdaClosure(LambdaApplicable):
    """
    An abstraction captured together with its environment.

    The body stays a template until the closure is applied; applying it is the calculus's
    only substitution step, realized as an environment push instead of rewriting terms.
    """

    def __init__(self, env: LambdaEnvironment, param_used: bool, body: Any, meta: Any = None) -> None:
        """
        Initialize a closure.

        Args:
            env: Captured environment
            param_used: Whether the body refers to the parameter
            body: Body template (a LambdaTemplate, avoiding circular import)
            meta: Opaque source metadata of the abstraction
        """
        self.env = env
        self.param_used = param_used
        self.body = body
        self.meta = meta

    def apply(self, arg: LambdaNode, session: LambdaSession | None = None) -> LambdaNode:
        env = self.env
        if self.param_used:
            env = env.push(arg)

        result: LambdaNode = self.body.materialize(env)
        return result

    def type_name(self) -> str:
        return "function"

    def __repr__(self) -> str:
        return f"LambdaClosure(depth={self.env.depth}, param_used={self.param_used})"


class LambdaApplication(LambdaNode):
    """
    An application of one live node to another.

    A pending application holds both sides.  Once applied it collapses: `left` holds the
    result, `right` becomes None, and the node never returns to the pending state.
    """

    def __init__(self, left: LambdaNode, right: LambdaNode, meta: Any = None) -> None:
        self.left = left
        self.right: LambdaNode | None = right
        self.meta = meta

    def is_collapsed(self) -> bool:
        """Check if this application has been replaced by its result."""
        return self.right is None

    def is_normal(self) -> bool:
        return False

    def reduce(self, session: LambdaSession | None = None) -> LambdaNode:
        if session is None:
            session = DEFAULT_SESSION

        if self.right is None:
            # Keep flattening the result as deeper reductions complete.
            self.left = self.left.reduce(session)
            return self.left

        if not session.single_step:
            while not self.left.is_normal():
                self.left = self.left.reduce(session)

        elif not self.left.is_normal():
            self.left = self.left.reduce(session)
            return self

        left = self.left
        if not isinstance(left, LambdaApplicable):
            raise LambdaFault(f"attempt to apply a non-function ({left.type_name()})", self.meta)

        if session.application_callback is not None:
            session.application_callback(left, self.right)

        result = left.apply(self.right, session)
        self._collapse(result)
        return result

    def _collapse(self, result: LambdaNode) -> None:
        if self.right is None:
            raise LambdaFault("application collapsed twice", self.meta)

        self.left = result
        self.right = None

    def type_name(self) -> str:
        return "application"

    def __repr__(self) -> str:
        state = "collapsed" if self.right is None else "pending"
        return f"LambdaApplication({state})"
