"""Main LambdaMachine class: a globals table with builtins, driven by one session."""

from typing import Any, Callable, Iterator

from lambda_machine.lambda_builtin_registry import LambdaBuiltinRegistry
from lambda_machine.lambda_builtins import LambdaInteger
from lambda_machine.lambda_globals import LambdaGlobals
from lambda_machine.lambda_node import LambdaNode
from lambda_machine.lambda_render import describe_meta, render
from lambda_machine.lambda_session import LambdaSession
from lambda_machine.lambda_trace import LambdaTraceWatcher


class LambdaMachine:
    """
    Lambda machine with integer builtins installed.

    The compiler collaborator declares its globals in `globals`, builds templates using
    `globals.reference()`, then fills them with `globals.define()`.  Globals are evaluated
    by name.
    """

    def __init__(
        self,
        single_step: bool = False,
        trace_watcher: LambdaTraceWatcher | None = None,
        max_steps: int | None = None
    ):
        """
        Initialize the machine.

        Args:
            single_step: Reduce one visible head step per `reduce()` call instead of
                normalizing the left side of each application first
            trace_watcher: Watcher notified before every application step
            max_steps: Maximum number of top-level reduction steps per evaluation,
                or None for no limit
        """
        self.max_steps = max_steps
        self.session = LambdaSession(
            single_step=single_step,
            application_callback=trace_watcher.on_application if trace_watcher is not None else None
        )

        self.builtin_registry = LambdaBuiltinRegistry()
        self.globals = LambdaGlobals()
        self.builtin_registry.install(self.globals)

    def evaluate(self, name: str) -> LambdaNode:
        """
        Reduce a global to normal form.

        Args:
            name: Global name

        Returns:
            The normal form

        Raises:
            LambdaLinkError: If the global is not defined
            LambdaEvalError: If reduction fails
        """
        return self.session.normalize(self.globals.entry(name), self.max_steps)

    def evaluate_and_format(self, name: str, name_of: Callable[[Any], str] = describe_meta) -> str:
        """
        Reduce a global to normal form and render the result.

        Args:
            name: Global name
            name_of: Maps node metadata to display text

        Returns:
            Rendered normal form
        """
        return render(self.evaluate(name), name_of)

    def steps(self, name: str) -> Iterator[LambdaNode]:
        """
        Reduce a global, yielding every intermediate state and finally the normal form.

        Args:
            name: Global name
        """
        return self.session.steps(self.globals.entry(name), self.max_steps)

    @staticmethod
    def to_python(node: LambdaNode) -> Any:
        """
        Convert a normal form to a Python value where one exists.

        Returns:
            An int for integer literals, otherwise the node itself
        """
        if isinstance(node, LambdaInteger):
            return node.to_python()

        return node
