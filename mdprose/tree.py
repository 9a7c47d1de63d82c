"""Generic helpers over the source tree: traversal and in-place removal."""

from collections.abc import Collection, Iterator

from mdprose.models import SourceNode


def children_of(node: SourceNode) -> list[SourceNode]:
    """Children of a parent node, or an empty list for leaves."""
    return getattr(node, "children", None) or []


def walk(node: SourceNode) -> Iterator[SourceNode]:
    """Yield every node of the tree in document (pre-)order, root first."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(children_of(current)))


def remove(tree: SourceNode, types: Collection[str], *, cascade: bool = True) -> int:
    """Remove, in place, every subtree whose root type is in ``types``.

    With ``cascade``, a parent left without children by the removal is removed
    as well. Parents that had no children to begin with are kept, and the root
    itself is never removed.

    Returns:
        Number of nodes removed directly (cascaded parents not counted).
    """
    ignored = set(types)
    removed = 0

    def prune(node: SourceNode) -> bool:
        """Prune node's children; True if node itself should go."""
        nonlocal removed
        children = getattr(node, "children", None)
        if not children:
            return False

        kept = []
        for child in children:
            if child.type in ignored:
                removed += 1
                continue
            if prune(child):
                continue
            kept.append(child)

        node.children = kept
        return cascade and not kept

    prune(tree)
    return removed
