"""Markdown parsing using markdown-it-py.

Configures markdown-it with the plugins we need:
- CommonMark base, raw HTML disabled
- GFM tables and strikethrough
- Footnotes

and adapts its SyntaxTreeNode into the mdast-style source tree. Labels of
reference-style links/images and the definitions themselves are kept
(``store_labels`` / ``inline_definitions``) so references can be resolved
later instead of at parse time.
"""

from collections.abc import Callable

from loguru import logger
from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.footnote import footnote_plugin

from mdprose.models import (
    Blockquote,
    Break,
    Code,
    Definition,
    Delete,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    Image,
    ImageReference,
    InlineCode,
    Link,
    LinkReference,
    List,
    ListItem,
    Paragraph,
    Root,
    SourceContent,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)


def create_parser() -> MarkdownIt:
    """Create configured markdown-it parser."""
    md = MarkdownIt(
        "commonmark",
        {"html": False, "store_labels": True, "inline_definitions": True},
    )
    md.enable("table")
    md.enable("strikethrough")
    footnote_plugin(md)
    return md


# Singleton parser instance
_parser: MarkdownIt | None = None


def get_parser() -> MarkdownIt:
    """Get or create the singleton parser instance."""
    global _parser
    if _parser is None:
        _parser = create_parser()
    return _parser


def parse_markdown(text: str) -> Root:
    """Parse markdown text into the source tree.

    Args:
        text: Markdown text to parse

    Returns:
        Root node of the source tree
    """
    tokens = get_parser().parse(text)
    return SourceTreeBuilder().build(SyntaxTreeNode(tokens))


def normalize_identifier(label: str) -> str:
    """Reference identifier as shared by definitions and references."""
    return " ".join(label.split()).lower()


class SourceTreeBuilder:
    """Transforms a markdown-it SyntaxTreeNode into the mdast-style source tree."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[SyntaxTreeNode], list[SourceContent]]] = {
            # Blocks
            "paragraph": self._paragraph,
            "heading": self._heading,
            "blockquote": self._blockquote,
            "bullet_list": self._list,
            "ordered_list": self._list,
            "list_item": self._list_item,
            "fence": self._code,
            "code_block": self._code,
            "hr": self._thematic_break,
            "definition": self._definition,
            "table": self._table,
            "thead": self._children,
            "tbody": self._children,
            "tr": self._table_row,
            "th": self._table_cell,
            "td": self._table_cell,
            "footnote_block": self._children,
            "footnote": self._footnote_definition,
            "footnote_reference": self._footnote_definition,
            # Inline
            "inline": self._children,
            "text": self._text,
            "text_special": self._text,
            "softbreak": self._softbreak,
            "hardbreak": self._hardbreak,
            "em": self._emphasis,
            "strong": self._strong,
            "s": self._delete,
            "code_inline": self._inline_code,
            "link": self._link,
            "image": self._image,
            "footnote_ref": self._footnote_reference,
            "footnote_anchor": self._skip,
        }

    def build(self, root: SyntaxTreeNode) -> Root:
        return Root(children=self._convert_children(root))

    def _convert(self, node: SyntaxTreeNode) -> list[SourceContent]:
        handler = self._handlers.get(node.type)
        if handler is None:
            logger.debug(f"Skipping unsupported markdown node {node.type!r}")
            return []
        return handler(node)

    def _convert_children(self, node: SyntaxTreeNode) -> list[SourceContent]:
        """Convert children, merging adjacent text runs."""
        result: list[SourceContent] = []
        for child in node.children:
            for converted in self._convert(child):
                if isinstance(converted, Text) and result and isinstance(result[-1], Text):
                    result[-1] = Text(value=result[-1].value + converted.value)
                else:
                    result.append(converted)
        return result

    def _children(self, node: SyntaxTreeNode) -> list[SourceContent]:
        return self._convert_children(node)

    def _skip(self, node: SyntaxTreeNode) -> list[SourceContent]:
        return []

    # === BLOCKS ===

    def _paragraph(self, node: SyntaxTreeNode) -> list[SourceContent]:
        return [Paragraph(children=self._convert_children(node))]

    def _heading(self, node: SyntaxTreeNode) -> list[SourceContent]:
        depth = int(node.tag[1])  # h1 -> 1, h2 -> 2, etc.
        return [Heading(depth=depth, children=self._convert_children(node))]

    def _blockquote(self, node: SyntaxTreeNode) -> list[SourceContent]:
        return [Blockquote(children=self._convert_children(node))]

    def _list(self, node: SyntaxTreeNode) -> list[SourceContent]:
        ordered = node.type == "ordered_list"
        start = int(node.attrs.get("start", 1)) if ordered else None
        return [List(ordered=ordered, start=start, children=self._convert_children(node))]

    def _list_item(self, node: SyntaxTreeNode) -> list[SourceContent]:
        return [ListItem(children=self._convert_children(node))]

    def _code(self, node: SyntaxTreeNode) -> list[SourceContent]:
        """Transform fenced or indented code block."""
        info = (node.info or "").strip() if node.type == "fence" else ""
        lang, _, meta = info.partition(" ")
        return [
            Code(
                lang=lang or None,
                meta=meta.strip() or None,
                value=(node.content or "").rstrip("\n"),
            )
        ]

    def _thematic_break(self, node: SyntaxTreeNode) -> list[SourceContent]:
        return [ThematicBreak()]

    def _definition(self, node: SyntaxTreeNode) -> list[SourceContent]:
        meta = node.meta
        return [
            Definition(
                identifier=normalize_identifier(meta["id"]),
                label=meta.get("label"),
                url=meta["url"],
                title=meta.get("title") or None,
            )
        ]

    def _table(self, node: SyntaxTreeNode) -> list[SourceContent]:
        # thead/tbody are flattened: rows sit directly under the table
        return [Table(children=self._convert_children(node))]

    def _table_row(self, node: SyntaxTreeNode) -> list[SourceContent]:
        return [TableRow(children=self._convert_children(node))]

    def _table_cell(self, node: SyntaxTreeNode) -> list[SourceContent]:
        return [TableCell(children=self._convert_children(node))]

    def _footnote_definition(self, node: SyntaxTreeNode) -> list[SourceContent]:
        label = node.meta.get("label")
        identifier = normalize_identifier(label) if label else str(node.meta.get("id", ""))
        return [FootnoteDefinition(identifier=identifier, label=label, children=self._convert_children(node))]

    # === INLINE ===

    def _text(self, node: SyntaxTreeNode) -> list[SourceContent]:
        # markdown-it leaves empty text tokens around emphasis delimiters
        content = node.content or ""
        return [Text(value=content)] if content else []

    def _softbreak(self, node: SyntaxTreeNode) -> list[SourceContent]:
        return [Text(value="\n")]

    def _hardbreak(self, node: SyntaxTreeNode) -> list[SourceContent]:
        return [Break()]

    def _emphasis(self, node: SyntaxTreeNode) -> list[SourceContent]:
        return [Emphasis(children=self._convert_children(node))]

    def _strong(self, node: SyntaxTreeNode) -> list[SourceContent]:
        return [Strong(children=self._convert_children(node))]

    def _delete(self, node: SyntaxTreeNode) -> list[SourceContent]:
        return [Delete(children=self._convert_children(node))]

    def _inline_code(self, node: SyntaxTreeNode) -> list[SourceContent]:
        return [InlineCode(value=node.content or "")]

    def _link(self, node: SyntaxTreeNode) -> list[SourceContent]:
        children = self._convert_children(node)
        label = node.meta.get("label")
        if label:
            return [LinkReference(identifier=normalize_identifier(label), label=label, children=children)]
        title = node.attrs.get("title")
        return [Link(url=str(node.attrs.get("href", "")), title=str(title) if title else None, children=children)]

    def _image(self, node: SyntaxTreeNode) -> list[SourceContent]:
        alt = _plain_text(node)
        label = node.meta.get("label")
        if label:
            return [ImageReference(identifier=normalize_identifier(label), label=label, alt=alt)]
        title = node.attrs.get("title")
        return [Image(url=str(node.attrs.get("src", "")), title=str(title) if title else None, alt=alt)]

    def _footnote_reference(self, node: SyntaxTreeNode) -> list[SourceContent]:
        label = node.meta.get("label")
        identifier = normalize_identifier(label) if label else str(node.meta.get("id", ""))
        return [FootnoteReference(identifier=identifier, label=label)]


def _plain_text(node: SyntaxTreeNode) -> str:
    """Plain text of an inline subtree (image alt text)."""
    if not node.children:
        if node.type in ("softbreak", "hardbreak"):
            return " "
        return node.content or ""
    return "".join(_plain_text(child) for child in node.children)
