"""Tests for the markdown-it → source tree adapter."""

from mdprose.models import (
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
    Paragraph,
    Root,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
)
from mdprose.parser import get_parser, normalize_identifier, parse_markdown
from mdprose.tree import walk


def nodes_of(tree: Root, cls) -> list:
    return [node for node in walk(tree) if isinstance(node, cls)]


def inline_children(md: str) -> list:
    """Children of the first paragraph."""
    paragraph = parse_markdown(md).children[0]
    assert isinstance(paragraph, Paragraph)
    return paragraph.children


class TestBlocks:
    def test_parser_is_singleton(self):
        assert get_parser() is get_parser()

    def test_heading_depth(self):
        heading = parse_markdown("### Three").children[0]
        assert isinstance(heading, Heading)
        assert heading.depth == 3
        assert heading.children == [Text(value="Three")]

    def test_fenced_code_lang_and_meta(self):
        code = parse_markdown("```python title=x\ncode\n```").children[0]
        assert code == Code(lang="python", meta="title=x", value="code")

    def test_indented_code_has_no_lang(self):
        code = parse_markdown("    indented\n").children[0]
        assert isinstance(code, Code)
        assert code.lang is None
        assert code.value == "indented"

    def test_ordered_list_start(self):
        lst = parse_markdown("3. a\n4. b").children[0]
        assert isinstance(lst, List)
        assert lst.ordered is True
        assert lst.start == 3
        assert len(lst.children) == 2

    def test_bullet_list_has_no_start(self):
        lst = parse_markdown("- a").children[0]
        assert lst.ordered is False
        assert lst.start is None

    def test_table_rows_are_direct_children(self):
        table = parse_markdown("| a | b |\n|---|---|\n| 1 | 2 |\n| 3 | 4 |").children[0]
        assert isinstance(table, Table)
        assert len(table.children) == 3
        assert all(isinstance(row, TableRow) for row in table.children)
        assert all(isinstance(cell, TableCell) for row in table.children for cell in row.children)

    def test_raw_html_is_text(self):
        """Raw HTML is disabled, so tags arrive as plain text."""
        assert inline_children("a <b>c</b>") == [Text(value="a <b>c</b>")]


class TestInline:
    def test_adjacent_text_merged(self):
        assert inline_children("one\ntwo\nthree") == [Text(value="one\ntwo\nthree")]

    def test_hard_break(self):
        children = inline_children("a\\\nb")
        assert children == [Text(value="a"), Break(), Text(value="b")]

    def test_inline_code(self):
        assert inline_children("`x`") == [InlineCode(value="x")]

    def test_inline_link(self):
        link = inline_children('[t](http://x "T")')[0]
        assert isinstance(link, Link)
        assert link.url == "http://x"
        assert link.title == "T"
        assert link.children == [Text(value="t")]

    def test_delimiters_leave_no_empty_text(self):
        assert inline_children("**[x](u)**") == [Strong(children=[Link(url="u", children=[Text(value="x")])])]
        assert inline_children("~~**_x_**~~") == [Delete(children=[Strong(children=[Emphasis(children=[Text(value="x")])])])]

    def test_inline_image_alt_is_plain_text(self):
        image = inline_children("![a *b*](i.png)")[0]
        assert isinstance(image, Image)
        assert image.url == "i.png"
        assert image.alt == "a b"
        assert image.title is None


class TestReferences:
    def test_image_reference_keeps_identifier(self):
        tree = parse_markdown('![Alt][Id]\n\n[id]: http://e/x.png "T"')
        image = tree.children[0].children[0]
        assert isinstance(image, ImageReference)
        assert image.identifier == "id"
        assert image.alt == "Alt"

    def test_definition_node(self):
        tree = parse_markdown('[Id]: http://e/x.png "T"\n\n![a][id]')
        (definition,) = nodes_of(tree, Definition)
        assert definition.identifier == "id"
        assert definition.url == "http://e/x.png"
        assert definition.title == "T"

    def test_definition_without_title(self):
        (definition,) = nodes_of(parse_markdown("[x]: http://e\n\n![x]"), Definition)
        assert definition.title is None

    def test_link_reference(self):
        tree = parse_markdown("[text][ref]\n\n[ref]: http://r")
        link = tree.children[0].children[0]
        assert isinstance(link, LinkReference)
        assert link.identifier == "ref"
        assert link.children == [Text(value="text")]

    def test_normalize_identifier(self):
        assert normalize_identifier("  Foo \n Bar ") == "foo bar"


class TestFootnotes:
    def test_footnote_reference_and_definition(self):
        tree = parse_markdown("a[^note]\n\n[^note]: The note.")
        (reference,) = nodes_of(tree, FootnoteReference)
        assert reference.identifier == "note"

        (definition,) = nodes_of(tree, FootnoteDefinition)
        assert definition.identifier == "note"
        texts = [node.value for node in walk(definition) if isinstance(node, Text)]
        assert "".join(texts).strip() == "The note."
