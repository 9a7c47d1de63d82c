"""Conversion rules from markdown source nodes to document nodes.

A rule's name doubles as the output type for rules without a custom ``parse``.
Node rules become tree nodes; mark rules are folded into the marks of the
content they wrap.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, cast

from loguru import logger

from mdprose.models import (
    Code,
    DocNode,
    Heading,
    Image,
    ImageReference,
    InlineCode,
    Link,
    List,
    Mark,
    SourceNode,
    Text,
)
from mdprose.resolver import apply_mark, parse_node
from mdprose.tree import children_of

if TYPE_CHECKING:
    from mdprose.process import MarkdownProcess

ParseFn = Callable[[SourceNode, "MarkdownProcess"], DocNode]


@dataclass(frozen=True)
class Rule:
    kind: Literal["node", "mark"]
    source_types: tuple[str, ...]
    parse: ParseFn | None = None
    serialize: Callable[..., str] | None = None  # Not used when parsing


class RuleRegistry:
    """Ordered, mutable mapping of rule name to Rule.

    Lookup by source type returns the first rule, in registration order, that
    claims it. Two rules claiming the same type is not reported.
    """

    def __init__(self, rules: dict[str, Rule] | None = None):
        self._rules: dict[str, Rule] = dict(rules or {})
        self._index: dict[str, str] | None = None

    def add_rule(self, name: str, rule: Rule) -> None:
        """Insert a rule, or replace the one with that name in place."""
        if name in self._rules:
            logger.debug(f"Replacing rule {name!r}")
        self._rules[name] = rule
        self._index = None

    def remove_rule(self, name: str) -> None:
        """Delete a rule by name. Unknown names are ignored."""
        if self._rules.pop(name, None) is not None:
            self._index = None

    def find(self, source_type: str) -> tuple[str, Rule] | None:
        """First (name, rule) claiming ``source_type``, or None."""
        if self._index is None:
            index: dict[str, str] = {}
            for name, rule in self._rules.items():
                for claimed in rule.source_types:
                    index.setdefault(claimed, name)
            self._index = index

        name = self._index.get(source_type)
        if name is None:
            return None
        return name, self._rules[name]

    def names(self) -> list[str]:
        return list(self._rules)

    def __getitem__(self, name: str) -> Rule:
        return self._rules[name]

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)


# === CUSTOM CONVERSIONS ===


def _parse_children(node: SourceNode, process: "MarkdownProcess") -> list[DocNode]:
    return [parse_node(child, process) for child in children_of(node)]


def parse_heading(node: SourceNode, process: "MarkdownProcess") -> DocNode:
    heading = cast(Heading, node)
    return DocNode(
        type="heading",
        attrs={"level": heading.depth},
        content=_parse_children(heading, process),
    )


def parse_code_block(node: SourceNode, process: "MarkdownProcess") -> DocNode:
    code = cast(Code, node)
    # Existing consumers of this format read code blocks as "heading" nodes.
    # Register a replacement "codeBlock" rule to emit a dedicated type.
    return DocNode(
        type="heading",
        attrs={"language": code.lang},
        content=[DocNode(type="text", text=code.value)],
    )


def parse_list(node: SourceNode, process: "MarkdownProcess") -> DocNode:
    list_node = cast(List, node)
    return DocNode(
        type="orderedList" if list_node.ordered else "bulletList",
        content=_parse_children(list_node, process),
    )


def parse_text(node: SourceNode, process: "MarkdownProcess") -> DocNode:
    return DocNode(type="text", text=cast(Text, node).value)


def parse_image(node: SourceNode, process: "MarkdownProcess") -> DocNode:
    image = cast(Image, node)
    return DocNode(type="image", attrs={"title": image.title, "alt": image.alt, "src": image.url})


def parse_image_reference(node: SourceNode, process: "MarkdownProcess") -> DocNode:
    """Resolve the image's URL and title through the reference index.

    An identifier without a definition yields an image without ``src``.
    """
    reference = cast(ImageReference, node)
    definition = process.sources.get(reference.identifier)
    if definition is None:
        logger.debug(f"No definition for image reference {reference.identifier!r}")
        return DocNode(type="image", attrs={"title": None, "alt": reference.alt})
    return DocNode(
        type="image",
        attrs={"title": definition.title, "alt": reference.alt, "src": definition.url},
    )


def parse_link(node: SourceNode, process: "MarkdownProcess") -> DocNode:
    link = cast(Link, node)
    mark = Mark(type="link", attrs={"href": link.url})
    if not link.children:
        return apply_mark(DocNode(type="text", text=""), mark)
    return apply_mark(parse_node(link.children[0], process), mark)


def parse_inline_code(node: SourceNode, process: "MarkdownProcess") -> DocNode:
    return DocNode(type="text", text=cast(InlineCode, node).value, marks=[Mark(type="code")])


def default_rules() -> RuleRegistry:
    """A fresh registry with the rich-text editor rule set."""
    return RuleRegistry(
        {
            "doc": Rule(kind="node", source_types=("root",)),
            "paragraph": Rule(kind="node", source_types=("paragraph",)),
            "blockquote": Rule(kind="node", source_types=("blockquote",)),
            "horizontalRule": Rule(kind="node", source_types=("thematicBreak",)),
            "heading": Rule(kind="node", source_types=("heading",), parse=parse_heading),
            "codeBlock": Rule(kind="node", source_types=("code",), parse=parse_code_block),
            "list": Rule(kind="node", source_types=("list",), parse=parse_list),
            "listItem": Rule(kind="node", source_types=("listItem",)),
            "text": Rule(kind="node", source_types=("text",), parse=parse_text),
            "image": Rule(kind="node", source_types=("image",), parse=parse_image),
            "imageReference": Rule(kind="node", source_types=("imageReference",), parse=parse_image_reference),
            "hardBreak": Rule(kind="node", source_types=("break",)),
            "table": Rule(kind="node", source_types=("table",)),
            "tableRow": Rule(kind="node", source_types=("tableRow",)),
            "tableCell": Rule(kind="node", source_types=("tableCell",)),
            "link": Rule(kind="mark", source_types=("link",), parse=parse_link),
            "italic": Rule(kind="mark", source_types=("emphasis",)),
            "strong": Rule(kind="mark", source_types=("strong",)),
            "code": Rule(kind="mark", source_types=("inlineCode",), parse=parse_inline_code),
            "strike": Rule(kind="mark", source_types=("delete",)),
        }
    )
