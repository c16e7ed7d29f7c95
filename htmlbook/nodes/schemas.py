"""Pydantic schemas for the semantic document tree.

The tree is produced by an upstream parser (or by htmlbook.nodes.loader
from its JSON/YAML shape) and is read-only for the converter. Every node
carries a back-reference to one shared DocumentContext; the converter
never writes to a node.

Node kinds form a closed set, discriminated on the ``kind`` field:
- document  - the root, owns the top-level blocks
- section   - numbered/titled container
- block     - paragraphs, listings, quotes, the TOC block, ...
- list      - ulist/olist/colist (items) and dlist (term/description entries)
- table     - head/body/foot rows of cells
- inline    - quoted text, anchors, callouts
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class References(BaseModel):
    """Document-wide reference table (id -> target text)."""

    model_config = ConfigDict(frozen=True)

    ids: dict[str, Optional[str]] = Field(default_factory=dict)


class DocumentContext(BaseModel):
    """Shared, read-only document state.

    One instance is bound to every node of a tree. ``root`` points back
    at the Document node (needed by the outline) and is never serialized.
    """

    model_config = ConfigDict(frozen=True)

    references: References = Field(default_factory=References)
    attributes: dict[str, Any] = Field(default_factory=dict)
    root: Optional[Any] = Field(default=None, exclude=True, repr=False)


class AbstractNode(BaseModel):
    """Fields shared by every node, including list items and table cells."""

    id: Optional[str] = None
    context: str = ""
    attributes: dict[str, Any] = Field(default_factory=dict)
    document: Optional[DocumentContext] = Field(
        default=None, exclude=True, repr=False
    )

    @property
    def node_name(self) -> str:
        """Logical template name for this node."""
        return self.context


class AbstractBlock(AbstractNode):
    """Block-like node: document, section, block, list, list item, table."""

    level: int = Field(default=0, ge=0)
    title: Optional[str] = None
    caption: Optional[str] = None
    style: Optional[str] = None
    content: Optional[str] = Field(
        default=None,
        description="Pre-rendered child markup, when the parser supplies it",
    )
    blocks: list["Node"] = Field(default_factory=list)

    @property
    def captioned_title(self) -> Optional[str]:
        if self.title is None:
            return None
        if self.caption:
            return f"{self.caption}{self.title}"
        return self.title

    @property
    def sections(self) -> list["Section"]:
        return [block for block in self.blocks if isinstance(block, Section)]


class Document(AbstractBlock):
    kind: Literal["document"] = "document"
    context: str = "document"
    header_title: Optional[str] = None


class Section(AbstractBlock):
    kind: Literal["section"] = "section"
    context: str = "section"
    level: int = Field(default=1, ge=0)
    index: int = 0
    number: Optional[int] = None
    sectname: str = "section"
    special: bool = False
    numbered: Optional[bool] = None
    sectnum: Optional[str] = Field(
        default=None,
        description="Display number, e.g. '1.2'",
    )


class Block(AbstractBlock):
    kind: Literal["block"] = "block"
    context: str = "paragraph"

    @property
    def blockname(self) -> str:
        return self.context


class ListItem(AbstractBlock):
    """A list item, a dlist term or a dlist description."""

    context: str = "list_item"
    text: Optional[str] = None


class DescriptionListEntry(BaseModel):
    """One dlist entry: one or more terms sharing a description."""

    model_config = ConfigDict(extra="forbid")

    terms: list[ListItem]
    description: Optional[ListItem] = None


class List(AbstractBlock):
    kind: Literal["list"] = "list"
    context: str = "ulist"
    items: list[
        Annotated[
            Union[DescriptionListEntry, ListItem],
            Field(union_mode="left_to_right"),
        ]
    ] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_item_shape(self) -> "List":
        """Ensure dlist items are entries and other lists hold plain items."""
        expected = DescriptionListEntry if self.context == "dlist" else ListItem
        for item in self.items:
            if not isinstance(item, expected):
                raise ValueError(
                    f"{self.context} items must be {expected.__name__}, "
                    f"got {type(item).__name__}"
                )
        return self

    @property
    def list_items(self) -> list[ListItem]:
        """Every ListItem of the list, dlist terms and descriptions included."""
        result: list[ListItem] = []
        for item in self.items:
            if isinstance(item, DescriptionListEntry):
                result.extend(item.terms)
                if item.description is not None:
                    result.append(item.description)
            else:
                result.append(item)
        return result


class Cell(AbstractNode):
    context: str = "cell"
    text: Optional[str] = None
    content: Optional[str] = None
    style: Optional[str] = None
    colspan: int = Field(default=1, ge=1)
    rowspan: int = Field(default=1, ge=1)


class TableColumn(BaseModel):
    width: Optional[int] = Field(default=None, description="Percentage width")
    halign: str = "left"
    valign: str = "top"
    style: Optional[str] = None


class TableRows(BaseModel):
    head: list[list[Cell]] = Field(default_factory=list)
    body: list[list[Cell]] = Field(default_factory=list)
    foot: list[list[Cell]] = Field(default_factory=list)

    def all_cells(self) -> list[Cell]:
        return [
            cell
            for rows in (self.head, self.body, self.foot)
            for row in rows
            for cell in row
        ]


class Table(AbstractBlock):
    kind: Literal["table"] = "table"
    context: str = "table"
    columns: list[TableColumn] = Field(default_factory=list)
    rows: TableRows = Field(default_factory=TableRows)


class Inline(AbstractNode):
    kind: Literal["inline"] = "inline"
    context: str = "quoted"
    text: Optional[str] = None
    type: Optional[str] = None
    target: Optional[str] = None

    @property
    def node_name(self) -> str:
        return f"inline_{self.context}"


Node = Annotated[
    Union[Document, Section, Block, List, Table, Inline],
    Field(discriminator="kind"),
]

for _model in (AbstractBlock, Document, Section, Block, ListItem,
               DescriptionListEntry, List, Table):
    _model.model_rebuild()
