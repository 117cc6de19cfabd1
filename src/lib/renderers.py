"""
Renderer implementations for analysis blocks

Each renderer transforms one formatter node (block or inline) into HTML.
Uses RendererSpec for metadata and lookup.
"""

import html
from typing import Any, Callable, Dict, Optional

from ..models.renderers import RendererSpec, RendererCategory, nodeName_get
from .log import WARN


class RendererRegistry:
    """
    Registry of renderer specifications and handlers

    Maps node names (heading, list, paragraph, plain, bold, italic) to
    RendererSpec objects. Handlers receive the node and the compiler, which
    supplies the theme and node_render() for nested content.
    """

    def __init__(self) -> None:
        """Initialize the registry and register all built-in renderers"""
        self.specs: Dict[str, RendererSpec] = {}
        self.blockRenderers_register()
        self.inlineRenderers_register()

    def register(self, spec: RendererSpec) -> None:
        """Register a renderer specification"""
        self.specs[spec.name] = spec
        for alias in spec.aliases:
            self.specs[alias] = spec

    def get(self, name: str) -> Optional[Callable[[Any, Any], str]]:
        """Get renderer handler by node name, or None if not found"""
        spec = self.spec_get(name)
        return spec.handler if spec else None

    def spec_get(self, name: str) -> Optional[RendererSpec]:
        """Get full renderer specification by node name"""
        return self.specs.get(name)

    def renderers_listByCategory(self, category: RendererCategory) -> list[RendererSpec]:
        """Get all renderers in a category (aliases listed once)"""
        seen: list[RendererSpec] = []
        for spec in self.specs.values():
            if spec.category == category and spec not in seen:
                seen.append(spec)
        return seen

    def node_render(self, node: Any, compiler: Any) -> str:
        """
        Render a single node to HTML

        Unknown node types are logged and rendered as escaped text of their
        text attribute (if any).
        """
        name = nodeName_get(node)
        handler = self.get(name)
        if handler is None:
            WARN(f"Unknown analysis node '{name}'")
            return html.escape(str(getattr(node, 'text', '')))
        return handler(node, compiler)

    def inline_render(self, nodes: Any, compiler: Any) -> str:
        """Render an inline sequence to HTML"""
        return ''.join(self.node_render(node, compiler) for node in nodes)

    def blockRenderers_register(self) -> None:
        """Register block-level renderers"""

        def heading_handler(node: Any, compiler: Any) -> str:
            """Heading level N renders as h(N + heading_offset)"""
            offset = int(compiler.theme.config_get('analysis.heading_offset', 1))
            tag = f"h{min(node.level + offset, 6)}"
            css_class = compiler.theme.class_get(f"heading{node.level}")
            content = self.inline_render(node.content, compiler)
            return f'<{tag} class="{css_class}">{content}</{tag}>'

        def list_handler(node: Any, compiler: Any) -> str:
            """Ordered lists render as ol, unordered as ul, one li per item"""
            tag = "ol" if node.ordered else "ul"
            css_class = compiler.theme.class_get(
                "list_ordered" if node.ordered else "list_unordered",
                "list-decimal" if node.ordered else "list-disc",
            )
            item_class = compiler.theme.class_get("list_item")
            items = '\n'.join(
                f'    <li class="{item_class}">{self.inline_render(item, compiler)}</li>'
                for item in node.items
            )
            return f'<{tag} class="{css_class}">\n{items}\n</{tag}>'

        def paragraph_handler(node: Any, compiler: Any) -> str:
            css_class = compiler.theme.class_get("paragraph")
            return f'<p class="{css_class}">{self.inline_render(node.content, compiler)}</p>'

        self.register(RendererSpec(
            name='heading',
            category=RendererCategory.BLOCK,
            description='Heading of level 1-3',
            handler=heading_handler,
            examples=['# Title', '## Section', '### Subsection'],
        ))

        self.register(RendererSpec(
            name='list',
            category=RendererCategory.BLOCK,
            description='Ordered or unordered list of items',
            handler=list_handler,
            examples=['- item', '* item', '1. item'],
        ))

        self.register(RendererSpec(
            name='paragraph',
            category=RendererCategory.BLOCK,
            description='Single line of text',
            handler=paragraph_handler,
            examples=['Any other line'],
        ))

    def inlineRenderers_register(self) -> None:
        """Register inline renderers"""

        def plain_handler(node: Any, compiler: Any) -> str:
            return html.escape(node.text)

        def make_emphasis_wrapper(tag: str, element: str) -> Callable[[Any, Any], str]:
            """Factory for emphasis tag wrappers"""
            def handler(node: Any, compiler: Any) -> str:
                css_class = compiler.theme.class_get(element)
                return f'<{tag} class="{css_class}">{html.escape(node.text)}</{tag}>'
            return handler

        self.register(RendererSpec(
            name='plain',
            category=RendererCategory.INLINE,
            description='Unformatted text',
            handler=plain_handler,
            aliases=['text'],
        ))

        self.register(RendererSpec(
            name='bold',
            category=RendererCategory.INLINE,
            description='Bold text',
            handler=make_emphasis_wrapper('strong', 'bold'),
            examples=['**bold**'],
            aliases=['strong'],
        ))

        self.register(RendererSpec(
            name='italic',
            category=RendererCategory.INLINE,
            description='Italic text',
            handler=make_emphasis_wrapper('em', 'italic'),
            examples=['*italic*', '_italic_'],
            aliases=['em'],
        ))
