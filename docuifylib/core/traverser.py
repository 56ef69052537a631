"""Synchronous tree walking and flattening.

Every helper here visits nodes depth-first, parent before children,
siblings left to right - the same order as the plugin visit phase.
"""

from typing import Iterator, List, Optional, Tuple

from .node import DocNode


def walk_tree(root: DocNode, max_depth: Optional[int] = None) -> Iterator[DocNode]:
    """Yield nodes in pre-order.

    Args:
        root: Starting node
        max_depth: Maximum depth to descend (root is depth 0)

    Yields:
        Nodes in traversal order
    """
    for node, _ in walk_tree_with_depth(root, max_depth):
        yield node


def walk_tree_with_depth(
    root: DocNode,
    max_depth: Optional[int] = None
) -> Iterator[Tuple[DocNode, int]]:
    """Yield (node, depth) tuples in pre-order.

    Uses an explicit stack so deep trees do not hit the recursion limit.
    """
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        yield node, depth

        if node.children and (max_depth is None or depth < max_depth):
            # Reversed so the leftmost child is popped first
            for child in reversed(node.children):
                stack.append((child, depth + 1))


def flatten_tree(root: DocNode, destructive: bool = False) -> List[DocNode]:
    """Flatten a tree into a list, including the root.

    Args:
        root: Tree to flatten
        destructive: If True, drop every node's ``children`` reference
                     after walking it; the list becomes the only
                     structural record

    Returns:
        Nodes in traversal order
    """
    flat = list(walk_tree(root))
    if destructive:
        for node in flat:
            node.children = None
    return flat


def flatten_files(root: DocNode) -> List[DocNode]:
    """Flatten a tree keeping only file nodes."""
    return [node for node in walk_tree(root) if node.is_file]


def find_by_path(root: DocNode, full_path: str) -> Optional[DocNode]:
    """Find a node by its full path, or None."""
    for node in walk_tree(root):
        if node.full_path == full_path:
            return node
    return None
