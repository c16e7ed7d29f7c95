"""Node projection - document tree nodes to template-facing models.

Each node kind maps to a plain dict restricted to the fields templates
may see. Projections are pure: they read the node and its shared
document context and never write to either.

Kind dispatch is closed. Anything that is not one of the six node kinds
raises UnknownNodeKindError instead of falling back to a generic model.
"""

import logging
from typing import Any, Mapping, Optional

from htmlbook.nodes.schemas import (
    AbstractBlock,
    AbstractNode,
    Block,
    Cell,
    DescriptionListEntry,
    Document,
    Inline,
    List,
    ListItem,
    Section,
    Table,
)

from .outline import generate_outline

logger = logging.getLogger(__name__)


class UnknownNodeKindError(ValueError):
    """Raised when a node is not one of the declared node kinds."""

    def __init__(self, node: Any):
        self.node_type = type(node).__name__
        attributes = getattr(node, "attributes", None)
        super().__init__(f"Unhandled node type {self.node_type}: {attributes}")


class NodeProjector:
    """Projects nodes into presentation models.

    Usage:
        projector = NodeProjector()
        model = projector.project(section)

    Args:
        child_content: Rendered markup keyed by ``id(node)``. When given,
            a block-like node that has children gets the joined rendering
            of its children as ``content`` instead of its own ``content``.
    """

    def __init__(self, child_content: Optional[Mapping[int, str]] = None):
        self.child_content = child_content

    def project(self, node: AbstractNode) -> dict[str, Any]:
        """Dispatch on node kind and return its presentation model.

        Raises:
            UnknownNodeKindError: If the node is not a known kind
        """
        if isinstance(node, Document):
            return self.project_document(node)
        elif isinstance(node, Section):
            return self.project_section(node)
        elif isinstance(node, Block):
            return self.project_block(node)
        elif isinstance(node, List):
            return self.project_list(node)
        elif isinstance(node, Table):
            return self.project_table(node)
        elif isinstance(node, Inline):
            return self.project_inline(node)
        raise UnknownNodeKindError(node)

    # -- Base projections --

    def project_node(self, node: AbstractNode) -> dict[str, Any]:
        context = node.document
        if context is not None:
            document = {
                "references": {"ids": context.references.ids},
                "attributes": context.attributes,
            }
        else:
            document = {"references": {"ids": {}}, "attributes": {}}

        return {
            "context": node.context,
            "node_name": node.node_name,
            "id": node.id,
            "attributes": dict(node.attributes),
            "document": document,
        }

    def project_abstract_block(self, node: AbstractBlock) -> dict[str, Any]:
        model = self.project_node(node)
        model.update({
            "level": node.level,
            "title": node.title,
            "caption": node.caption,
            "captioned_title": node.captioned_title,
            "style": node.style,
            "content": self._content(node),
        })
        return model

    # -- Kind projections --

    def project_document(self, node: Document) -> dict[str, Any]:
        model = self.project_abstract_block(node)
        model["header"] = {"title": node.header_title}
        return model

    def project_section(self, node: Section) -> dict[str, Any]:
        model = self.project_abstract_block(node)
        model.update({
            "index": node.index,
            "number": node.number,
            "sectname": node.sectname,
            "special": node.special,
            "numbered": bool(node.numbered),
            "sectnum": node.sectnum,
        })
        return model

    def project_block(self, node: Block) -> dict[str, Any]:
        model = self.project_abstract_block(node)
        model["blockname"] = node.blockname

        if node.blockname == "toc":
            root = node.document.root if node.document is not None else None
            if root is None:
                logger.debug(f"TOC block {node.id!r} has no document root; outline is empty")
                model["content"] = ""
            else:
                model["content"] = generate_outline(root)
        return model

    def project_list(self, node: List) -> dict[str, Any]:
        model = self.project_abstract_block(node)

        if node.context == "dlist":
            model["items"] = [
                self.project_dlist_entry(entry)
                for entry in node.items
                if isinstance(entry, DescriptionListEntry)
            ]
        else:
            model["items"] = [
                self.project_list_item(item)
                for item in node.items
                if isinstance(item, ListItem)
            ]
        return model

    def project_dlist_entry(self, entry: DescriptionListEntry) -> dict[str, Any]:
        return {
            "terms": [self.project_list_item(term) for term in entry.terms],
            "description": (
                self.project_list_item(entry.description)
                if entry.description is not None
                else None
            ),
        }

    def project_list_item(self, node: ListItem) -> dict[str, Any]:
        model = self.project_abstract_block(node)
        model["text"] = node.text or None
        return model

    def project_table(self, node: Table) -> dict[str, Any]:
        model = self.project_abstract_block(node)
        model["columns"] = [
            {
                "colnumber": number,
                "width": column.width,
                "halign": column.halign,
                "valign": column.valign,
                "style": column.style,
            }
            for number, column in enumerate(node.columns, start=1)
        ]
        model["rows"] = {
            "head": [[self.project_cell(cell) for cell in row] for row in node.rows.head],
            "body": [[self.project_cell(cell) for cell in row] for row in node.rows.body],
            "foot": [[self.project_cell(cell) for cell in row] for row in node.rows.foot],
        }
        return model

    def project_cell(self, node: Cell) -> dict[str, Any]:
        model = self.project_node(node)
        model.update({
            "text": node.text,
            "content": node.content,
            "style": node.style,
            "colspan": node.colspan,
            "rowspan": node.rowspan,
        })
        return model

    def project_inline(self, node: Inline) -> dict[str, Any]:
        model = self.project_node(node)
        model.update({
            "text": node.text,
            "type": node.type,
            "target": node.target,
        })
        return model

    def _content(self, node: AbstractBlock) -> Optional[str]:
        if self.child_content is not None and node.blocks:
            return "\n".join(self.child_content[id(child)] for child in node.blocks)
        return node.content
