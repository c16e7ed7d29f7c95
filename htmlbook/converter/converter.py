"""HTMLBook converter - the entry point wiring projection, lookup and rendering.

A conversion call classifies and projects the node, resolves the template
for its logical name and renders it. Nothing is caught along the way: an
unknown node kind, a missing template or a template error aborts the
whole call.
"""

import logging
from typing import Optional

from htmlbook.nodes.schemas import AbstractBlock, AbstractNode, Document, List
from htmlbook.projection.projector import NodeProjector
from htmlbook.templates.registry import TemplateRegistry, create_environment
from htmlbook.templates.renderer import TemplateRenderer

from .options import ConverterOptions

logger = logging.getLogger(__name__)

EMBEDDED_TRANSFORM = "embedded"


class HtmlbookConverter:
    """Converts document tree nodes to HTMLBook markup.

    Usage:
        converter = HtmlbookConverter(ConverterOptions(template_dirs=[Path("t")]))
        html = converter.convert(section)
        body = converter.convert_tree(document, transform="embedded")
    """

    def __init__(self, options: Optional[ConverterOptions] = None):
        self.options = options or ConverterOptions()

        env = create_environment(
            autoescape=self.options.autoescape,
            trim_blocks=self.options.trim_blocks,
            lstrip_blocks=self.options.lstrip_blocks,
        )
        self.registry = TemplateRegistry(self.options.template_dirs, env)
        self.renderer = TemplateRenderer()
        self.projector = NodeProjector()

    def convert(self, node: AbstractNode, transform: Optional[str] = None) -> str:
        """Convert one node, using the pre-rendered ``content`` of its children.

        Args:
            node: Node to convert
            transform: "embedded" renders a Document without its outer wrapper

        Returns:
            Rendered markup
        """
        return self._convert(node, transform, self.projector)

    def convert_tree(self, node: AbstractNode, transform: Optional[str] = None) -> str:
        """Convert a node and all of its descendants, bottom-up.

        Children are rendered first; their joined output becomes the
        ``content`` of the parent (and of list items). The tree itself is
        not modified. ``transform`` applies to the root only.
        """
        rendered: dict[int, str] = {}
        projector = NodeProjector(child_content=rendered)

        stack: list[tuple[AbstractNode, bool]] = [(node, False)]
        while stack:
            current, children_done = stack.pop()
            if children_done:
                root_transform = transform if current is node else None
                rendered[id(current)] = self._convert(current, root_transform, projector)
                continue

            stack.append((current, True))
            for child in reversed(_render_children(current)):
                stack.append((child, False))

        logger.debug(f"Converted tree of {len(rendered)} nodes")
        return rendered[id(node)]

    def template_name(self, node: AbstractNode, transform: Optional[str] = None) -> str:
        if isinstance(node, Document) and transform == EMBEDDED_TRANSFORM:
            return EMBEDDED_TRANSFORM
        return node.node_name

    def _convert(
        self,
        node: AbstractNode,
        transform: Optional[str],
        projector: NodeProjector,
    ) -> str:
        model = projector.project(node)
        template = self.registry.get(self.template_name(node, transform))
        return self.renderer.render(template, model)


def _render_children(node: AbstractNode) -> list[AbstractNode]:
    """Nodes whose output feeds the ``content`` of ``node`` or its list items."""
    children: list[AbstractNode] = []
    if isinstance(node, List):
        for item in node.list_items:
            children.extend(item.blocks)
    if isinstance(node, AbstractBlock):
        children.extend(node.blocks)
    return children


# Global converter instance
_converter: Optional[HtmlbookConverter] = None


def get_converter() -> HtmlbookConverter:
    """Get the global HtmlbookConverter, configured from the environment."""
    global _converter
    if _converter is None:
        _converter = HtmlbookConverter(ConverterOptions.from_env())
    return _converter
