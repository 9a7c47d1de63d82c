"""Reference index: resolves reference identifiers to their definitions."""

from mdprose.models import Definition, SourceNode
from mdprose.tree import walk


def build_reference_index(tree: SourceNode) -> dict[str, Definition]:
    """Collect every definition node in the tree, keyed by identifier.

    Must run on the unfiltered tree, since definitions are dropped afterwards.
    A repeated identifier overwrites the earlier definition.
    """
    index: dict[str, Definition] = {}
    for node in walk(tree):
        if isinstance(node, Definition):
            index[node.identifier] = node
    return index
