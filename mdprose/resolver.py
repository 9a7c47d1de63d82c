"""Recursive conversion of a source node into a document node."""

from typing import TYPE_CHECKING

from loguru import logger

from mdprose.exceptions import NestingTooDeepError, UnmappedNodeError
from mdprose.models import DocNode, Mark, SourceNode
from mdprose.tree import children_of

if TYPE_CHECKING:
    from mdprose.process import MarkdownProcess


def apply_mark(content: DocNode, mark: Mark) -> DocNode:
    """Return ``content`` with ``mark`` prepended to its marks.

    Marks are applied as recursion unwinds, so for ``strong(link(text))`` the
    text ends up with ``[strong, link]``.
    """
    return content.model_copy(update={"marks": [mark, *(content.marks or [])]})


def parse_node(node: SourceNode, process: "MarkdownProcess") -> DocNode:
    """Convert a single source node (and its subtree) using the process's rules.

    Raises:
        UnmappedNodeError: no rule claims ``node.type``.
        NestingTooDeepError: the process has a ``max_depth`` and the tree is deeper.
    """
    match = process.rules.find(node.type)
    if match is None:
        raise UnmappedNodeError(node.type, node.model_dump_json())

    name, rule = match
    max_depth = process.options.max_depth

    process.depth += 1
    try:
        if max_depth is not None and process.depth > max_depth:
            raise NestingTooDeepError(max_depth)

        if rule.parse is not None:
            return rule.parse(node, process)

        children = children_of(node)

        if rule.kind == "mark":
            if not children:
                logger.debug(f"Mark node {node.type!r} has no children, marking empty text")
                return apply_mark(DocNode(type="text", text=""), Mark(type=name))
            return apply_mark(parse_node(children[0], process), Mark(type=name))

        content = [parse_node(child, process) for child in children]
        if not content:
            return DocNode(type=name)
        return DocNode(type=name, content=content)
    finally:
        process.depth -= 1
