"""
Block and inline node models for the analysis formatter

Type-safe structures produced by lib.formatter and consumed by the
renderer registry. Blocks are ordered top-to-bottom in render order;
inline nodes are ordered left-to-right in source order.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass(frozen=True)
class PlainText:
    """Unformatted span of text"""
    text: str


@dataclass(frozen=True)
class Bold:
    """Span delimited by ``**`` in the source, delimiters stripped"""
    text: str


@dataclass(frozen=True)
class Italic:
    """Span delimited by ``*`` or ``_`` in the source, delimiters stripped"""
    text: str


InlineNode = Union[PlainText, Bold, Italic]
InlineSequence = List[InlineNode]


@dataclass(frozen=True)
class Heading:
    """
    Heading block

    Attributes:
        level: 1, 2 or 3 (number of leading ``#`` characters)
        content: Formatted heading text (may be empty for a bare ``"# "``)
    """
    level: int
    content: InlineSequence = field(default_factory=list)


@dataclass(frozen=True)
class ListBlock:
    """
    Run of consecutive list items of the same kind

    Attributes:
        ordered: True for ``1.``-style items, False for ``-``/``*`` items
        items: One InlineSequence per item, never empty
    """
    ordered: bool
    items: List[InlineSequence] = field(default_factory=list)


@dataclass(frozen=True)
class Paragraph:
    """Any line that is not a heading, list item or blank line"""
    content: InlineSequence = field(default_factory=list)


Block = Union[Heading, ListBlock, Paragraph]


class ListKind(Enum):
    """Kind of list currently being accumulated"""
    UNORDERED = "unordered"
    ORDERED = "ordered"


@dataclass
class ListAccumulatorState:
    """
    Transient list buffer used during one segmentation pass

    Attributes:
        pending_items: Raw item texts collected so far
        kind: Kind of the pending list, None when nothing is pending
    """
    pending_items: List[str] = field(default_factory=list)
    kind: Optional[ListKind] = None
