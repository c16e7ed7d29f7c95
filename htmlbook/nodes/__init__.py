"""Semantic document tree consumed by the converter.

- schemas.py - Pydantic models for the six node kinds and their parts
- loader.py  - Builds trees from JSON/YAML payloads and binds the shared context
"""

from .schemas import (
    AbstractBlock,
    AbstractNode,
    Block,
    Cell,
    DescriptionListEntry,
    Document,
    DocumentContext,
    Inline,
    List,
    ListItem,
    Node,
    References,
    Section,
    Table,
    TableColumn,
    TableRows,
)
from .loader import (
    bind_document_context,
    iter_tree,
    load_document_file,
    load_document_tree,
    load_node,
)

__all__ = [
    "AbstractBlock",
    "AbstractNode",
    "Block",
    "Cell",
    "DescriptionListEntry",
    "Document",
    "DocumentContext",
    "Inline",
    "List",
    "ListItem",
    "Node",
    "References",
    "Section",
    "Table",
    "TableColumn",
    "TableRows",
    "bind_document_context",
    "iter_tree",
    "load_document_file",
    "load_document_tree",
    "load_node",
]
