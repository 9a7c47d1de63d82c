"""Data models for the markdown source tree and the document-model output tree.

The source side is an mdast-style tagged union: every node kind is its own
pydantic model with a literal ``type`` discriminator. The output side is the
generic rich-text editor JSON shape: nodes with attrs, content and marks.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, field_serializer

# === SOURCE TREE (mdast vocabulary) ===


class Text(BaseModel):
    type: Literal["text"] = "text"
    value: str


class InlineCode(BaseModel):
    type: Literal["inlineCode"] = "inlineCode"
    value: str


class Break(BaseModel):
    type: Literal["break"] = "break"


class ThematicBreak(BaseModel):
    type: Literal["thematicBreak"] = "thematicBreak"


class Code(BaseModel):
    type: Literal["code"] = "code"
    lang: str | None = None
    meta: str | None = None
    value: str


class Image(BaseModel):
    type: Literal["image"] = "image"
    url: str
    title: str | None = None
    alt: str | None = None


class ImageReference(BaseModel):
    type: Literal["imageReference"] = "imageReference"
    identifier: str  # Normalized, matches Definition.identifier
    label: str | None = None
    alt: str | None = None


class Definition(BaseModel):
    """Stand-alone ``[label]: url "title"`` line."""

    type: Literal["definition"] = "definition"
    identifier: str
    label: str | None = None
    url: str
    title: str | None = None


class FootnoteReference(BaseModel):
    type: Literal["footnoteReference"] = "footnoteReference"
    identifier: str
    label: str | None = None


class Paragraph(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    children: list["SourceContent"] = Field(default_factory=list)


class Heading(BaseModel):
    type: Literal["heading"] = "heading"
    depth: Literal[1, 2, 3, 4, 5, 6]
    children: list["SourceContent"] = Field(default_factory=list)


class Blockquote(BaseModel):
    type: Literal["blockquote"] = "blockquote"
    children: list["SourceContent"] = Field(default_factory=list)


class List(BaseModel):
    type: Literal["list"] = "list"
    ordered: bool = False
    start: int | None = None
    children: list["SourceContent"] = Field(default_factory=list)


class ListItem(BaseModel):
    type: Literal["listItem"] = "listItem"
    children: list["SourceContent"] = Field(default_factory=list)


class Table(BaseModel):
    type: Literal["table"] = "table"
    children: list["SourceContent"] = Field(default_factory=list)


class TableRow(BaseModel):
    type: Literal["tableRow"] = "tableRow"
    children: list["SourceContent"] = Field(default_factory=list)


class TableCell(BaseModel):
    type: Literal["tableCell"] = "tableCell"
    children: list["SourceContent"] = Field(default_factory=list)


class Emphasis(BaseModel):
    type: Literal["emphasis"] = "emphasis"
    children: list["SourceContent"] = Field(default_factory=list)


class Strong(BaseModel):
    type: Literal["strong"] = "strong"
    children: list["SourceContent"] = Field(default_factory=list)


class Delete(BaseModel):
    """GFM strikethrough."""

    type: Literal["delete"] = "delete"
    children: list["SourceContent"] = Field(default_factory=list)


class Link(BaseModel):
    type: Literal["link"] = "link"
    url: str
    title: str | None = None
    children: list["SourceContent"] = Field(default_factory=list)


class LinkReference(BaseModel):
    type: Literal["linkReference"] = "linkReference"
    identifier: str
    label: str | None = None
    children: list["SourceContent"] = Field(default_factory=list)


class FootnoteDefinition(BaseModel):
    type: Literal["footnoteDefinition"] = "footnoteDefinition"
    identifier: str
    label: str | None = None
    children: list["SourceContent"] = Field(default_factory=list)


SourceContent = Annotated[
    Union[
        Text,
        InlineCode,
        Break,
        ThematicBreak,
        Code,
        Image,
        ImageReference,
        Definition,
        FootnoteReference,
        Paragraph,
        Heading,
        Blockquote,
        List,
        ListItem,
        Table,
        TableRow,
        TableCell,
        Emphasis,
        Strong,
        Delete,
        Link,
        LinkReference,
        FootnoteDefinition,
    ],
    Field(discriminator="type"),
]


class Root(BaseModel):
    type: Literal["root"] = "root"
    children: list[SourceContent] = Field(default_factory=list)


SourceNode = (
    Root
    | Text
    | InlineCode
    | Break
    | ThematicBreak
    | Code
    | Image
    | ImageReference
    | Definition
    | FootnoteReference
    | Paragraph
    | Heading
    | Blockquote
    | List
    | ListItem
    | Table
    | TableRow
    | TableCell
    | Emphasis
    | Strong
    | Delete
    | Link
    | LinkReference
    | FootnoteDefinition
)

# Update forward references
Paragraph.model_rebuild()
Heading.model_rebuild()
Blockquote.model_rebuild()
List.model_rebuild()
ListItem.model_rebuild()
Table.model_rebuild()
TableRow.model_rebuild()
TableCell.model_rebuild()
Emphasis.model_rebuild()
Strong.model_rebuild()
Delete.model_rebuild()
Link.model_rebuild()
LinkReference.model_rebuild()
FootnoteDefinition.model_rebuild()


# === DOCUMENT TREE (editor JSON) ===


class Mark(BaseModel):
    type: str
    attrs: dict[str, Any] | None = None


class DocNode(BaseModel):
    """A node of the rich-text document tree.

    Leaves carry no ``content``; inline formatting lives in ``marks`` rather
    than in wrapper nodes.
    """

    type: str
    attrs: dict[str, Any] | None = None
    content: list["DocNode"] | None = None
    marks: list[Mark] | None = None
    text: str | None = None

    @field_serializer("attrs")
    def _drop_unset_attrs(self, attrs: dict[str, Any] | None) -> dict[str, Any] | None:
        if attrs is None:
            return None
        return {key: value for key, value in attrs.items() if value is not None}

    def to_dict(self) -> dict[str, Any]:
        """Editor payload: unset fields and unset attrs are omitted."""
        return self.model_dump(exclude_none=True)


DocNode.model_rebuild()
