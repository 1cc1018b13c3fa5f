"""
Utilities for walking and rendering the event type hierarchy.
"""

from typing import Callable, List

from .nodes import EventTypeNode


def get_type_path(node: EventTypeNode) -> List[EventTypeNode]:
    """
    Nodes from the root down to ``node``, both included.

    Example:
        >>> [t.key for t in get_type_path(WEB_HISTORY)]
        ['ROOT_EVENT_TYPE', 'WEB_ACTIVITY', 'WEB_HISTORY']
    """
    path = []
    current = node
    while current is not None:
        path.append(current)
        current = current.super_type
    return list(reversed(path))


def format_type_path(node: EventTypeNode, separator: str = ">") -> str:
    """Display names along the path to ``node`` (e.g. "Event Types>Web Activity")."""
    return separator.join(t.display_name for t in get_type_path(node))


def get_leaf_types(node: EventTypeNode) -> List[EventTypeNode]:
    """All types without children under ``node``, in id order per level."""
    leaves = []

    def _traverse(current: EventTypeNode):
        children = current.sub_types()
        if not children:
            leaves.append(current)
        for child in children:
            _traverse(child)

    _traverse(node)
    return leaves


def _default_label(node: EventTypeNode) -> str:
    return f"{node.display_name} ({node.id})"


def format_type_tree(
    node: EventTypeNode,
    label: Callable[[EventTypeNode], str] = _default_label,
) -> str:
    """
    Format the hierarchy below ``node`` as an ASCII tree diagram.

    Args:
        node: Node whose descendants are drawn; it is printed as the first line
        label: Renders one node

    Returns:
        String representation of the tree, e.g.

        Event Types (0)
        ├── File System (1)
        │   ├── File Modified (4)
        ...
    """
    lines = [label(node)]

    def _format_level(current: EventTypeNode, pfx: str = ""):
        children = current.sub_types()
        for i, child in enumerate(children):
            is_last = i == len(children) - 1
            connector = "└── " if is_last else "├── "
            lines.append(f"{pfx}{connector}{label(child)}")
            _format_level(child, pfx + ("    " if is_last else "│   "))

    _format_level(node)
    return "\n".join(lines)
