"""Textual rendering of live graphs for drivers and trace output."""

from typing import Any, Callable

from lambda_machine.lambda_node import LambdaApplication, LambdaClosure, LambdaIndirection, LambdaNode


PLACEHOLDER = "(??)"


def describe_meta(meta: Any) -> str:
    """
    Default display name for a node's metadata.

    Args:
        meta: Opaque metadata attached by the compiler

    Returns:
        The metadata itself if it is a string, its `name` if it has a string name,
        otherwise a placeholder
    """
    if isinstance(meta, str):
        return meta

    name = getattr(meta, 'name', None)
    if isinstance(name, str):
        return name

    return PLACEHOLDER


def _skip_collapsed(node: LambdaNode) -> LambdaNode:
    while isinstance(node, LambdaApplication) and node.right is None:
        node = node.left

    return node


def render(node: LambdaNode, name_of: Callable[[Any], str] = describe_meta) -> str:
    """
    Render a live node as text.

    Indirections and closures are shown by the name of their metadata, collapsed
    applications by their current value, and pending applications as `left right`
    (application associates to the left, so only a pending application on the right is
    parenthesized).  Builtins and literals describe themselves.

    Args:
        node: Live node to render
        name_of: Maps a node's metadata to display text

    Returns:
        Rendered text
    """
    node = _skip_collapsed(node)

    if isinstance(node, LambdaApplication):
        assert node.right is not None
        left = render(node.left, name_of)
        right_node = _skip_collapsed(node.right)
        right = render(right_node, name_of)
        if isinstance(right_node, LambdaApplication):
            right = f"({right})"

        return f"{left} {right}"

    if isinstance(node, (LambdaIndirection, LambdaClosure)):
        return name_of(node.meta)

    return node.describe(name_of)
