"""Lambda machine trace watcher implementations.

A trace watcher observes every application step: it is called with the left and right
sides of an application just before the application is performed.  Wire a watcher into a
session with `LambdaSession(application_callback=watcher.on_application)`.
"""

from typing import Any, Callable, List, Protocol

from lambda_machine.lambda_node import LambdaNode
from lambda_machine.lambda_render import describe_meta, render


class LambdaTraceWatcher(Protocol):
    """Protocol for lambda machine trace watchers."""
    def on_application(self, left: LambdaNode, right: LambdaNode) -> None:
        """
        Called just before an application is performed.

        Args:
            left: The normal, applicable left side
            right: The unreduced argument
        """


def format_application(left: LambdaNode, right: LambdaNode, name_of: Callable[[Any], str] = describe_meta) -> str:
    """Format an application step as a single trace line."""
    return f"{render(left, name_of)} <- {render(right, name_of)}"


class LambdaStdoutTraceWatcher:
    """Watcher that prints application steps to stdout."""

    def __init__(self, name_of: Callable[[Any], str] = describe_meta) -> None:
        self.name_of = name_of

    def on_application(self, left: LambdaNode, right: LambdaNode) -> None:
        """
        Print the application step to stdout.

        Args:
            left: The applicable left side
            right: The argument
        """
        print(format_application(left, right, self.name_of))


class LambdaFileTraceWatcher:
    """Watcher that writes application steps to a file."""

    def __init__(self, filepath: str, name_of: Callable[[Any], str] = describe_meta):
        """
        Initialize file trace watcher.

        Args:
            filepath: Path to the file to write traces to
            name_of: Maps node metadata to display text
        """
        self.name_of = name_of
        try:
            self.file = open(filepath, 'w', encoding='utf-8')  # pylint: disable=consider-using-with

        except IOError as e:
            raise RuntimeError(f"Failed to open trace file '{filepath}': {e}") from e

    def on_application(self, left: LambdaNode, right: LambdaNode) -> None:
        """
        Write the application step to the file.

        Args:
            left: The applicable left side
            right: The argument
        """
        try:
            self.file.write(format_application(left, right, self.name_of) + '\n')
            self.file.flush()

        except IOError as e:
            raise RuntimeError(f"Failed to write to trace file: {e}") from e

    def close(self) -> None:
        """Close the trace file."""
        self.file.close()

    def __enter__(self) -> 'LambdaFileTraceWatcher':
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()


class LambdaBufferingTraceWatcher:
    """
    Watcher that buffers application steps for programmatic access.

    Includes a configurable limit to prevent unbounded memory growth when a reduction runs
    for a long time.  Every step is counted, including the ones discarded.
    """

    def __init__(self, max_traces: int = 10000, name_of: Callable[[Any], str] = describe_meta) -> None:
        """
        Initialize buffering trace watcher.

        Args:
            max_traces: Maximum number of traces to buffer.  When the limit is reached,
                oldest traces are discarded.
            name_of: Maps node metadata to display text
        """
        self.traces: List[str] = []
        self.max_traces = max_traces
        self.name_of = name_of
        self.total_traces = 0
        self.clipped = False

    def on_application(self, left: LambdaNode, right: LambdaNode) -> None:
        """
        Buffer the application step.

        Args:
            left: The applicable left side
            right: The argument
        """
        self.total_traces += 1

        if len(self.traces) >= self.max_traces:
            self.traces.pop(0)
            self.clipped = True

        self.traces.append(format_application(left, right, self.name_of))

    def get_traces(self) -> List[str]:
        """
        Get all buffered traces.

        Returns:
            List of trace lines
        """
        return self.traces.copy()

    def clear(self) -> None:
        """Clear all buffered traces."""
        self.traces.clear()
        self.total_traces = 0
        self.clipped = False

    def is_clipped(self) -> bool:
        """Check if traces have been discarded due to the buffer limit."""
        return self.clipped

    def get_total_count(self) -> int:
        """Get total number of application steps observed (including discarded)."""
        return self.total_traces
