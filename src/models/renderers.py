"""
Renderer specification and metadata models

Defines the structure and categories of block/inline renderers for
registry management and documentation.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, List


class RendererCategory(Enum):
    """
    Categories of analysis renderers
    """
    BLOCK = "block"      # heading, list, paragraph
    INLINE = "inline"    # plain, bold, italic


@dataclass
class RendererSpec:
    """
    Specification for an analysis node renderer

    Attributes:
        name: Node type name (see NODE_NAMES)
        category: Category for organization
        description: Human-readable description
        handler: Rendering function (node, compiler) -> str
        examples: Example source strings producing this node
        aliases: Alternative names for the renderer
    """
    name: str
    category: RendererCategory
    description: str
    handler: Callable
    examples: List[str] = field(default_factory=list)
    aliases: List[str] = field(default_factory=list)


# Node class name -> renderer name
NODE_NAMES = {
    'Heading': 'heading',
    'ListBlock': 'list',
    'Paragraph': 'paragraph',
    'PlainText': 'plain',
    'Bold': 'bold',
    'Italic': 'italic',
}


def nodeName_get(node: object) -> str:
    """Renderer name for a node instance, or its lowercased class name if unknown"""
    class_name = type(node).__name__
    return NODE_NAMES.get(class_name, class_name.lower())
