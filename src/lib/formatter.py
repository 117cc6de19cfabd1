"""
Formatter for AI-generated monthly analysis text

Turns the restricted markdown subset returned by the analysis service into
an ordered list of blocks (lib.renderers turns those into HTML).

The formatter operates in two phases:
1. Segmentation: classify each line as heading, list item, blank line or
   paragraph, accumulating consecutive list items into list blocks
2. Inline formatting: replace **bold** and *italic* / _italic_ spans in
   each block's text with emphasis nodes

The formatter is total: every string produces some sequence of blocks and
unterminated delimiters are left as plain text.

Example:
    >>> blocks = markdown_format("# Title\\n- a\\n- b")
    >>> blocks[0]
    Heading(level=1, content=[PlainText(text='Title')])
    >>> blocks[1].ordered
    False
"""

import re
from typing import List, Optional, Sequence

from ..models.blocks import (
    Block,
    Bold,
    Heading,
    InlineSequence,
    Italic,
    ListAccumulatorState,
    ListBlock,
    ListKind,
    Paragraph,
    PlainText,
)


HEADING_MARKERS = (("### ", 3), ("## ", 2), ("# ", 1))

UNORDERED_ITEM = re.compile(r'^[-*]\s+')
ORDERED_ITEM = re.compile(r'^[0-9]+\.\s+')

BOLD_SPAN = re.compile(r'\*\*([^\r\n\u2028\u2029]+?)\*\*')
ITALIC_SPAN = re.compile(r'(?:\*|_)([^\r\n\u2028\u2029]+?)(?:\*|_)')


class ListAccumulator:
    """
    Buffers consecutive list items of one kind

    Lives only for a single markdown_format() call; the state it carries is
    never shared between calls.
    """

    def __init__(self) -> None:
        self.state = ListAccumulatorState()

    def accept(self, kind: ListKind, item_text: str) -> Optional[ListBlock]:
        """
        Add an item to the pending list

        If the item's kind differs from the pending kind, the pending list is
        flushed first and returned so the caller can emit it before the new
        accumulation starts.

        Args:
            kind: Kind of the incoming list item
            item_text: Item text with the list marker stripped

        Returns:
            The flushed ListBlock on a kind transition, otherwise None
        """
        flushed = None
        if self.state.kind is not kind:
            flushed = self.flush()
            self.state.kind = kind
        self.state.pending_items.append(item_text)
        return flushed

    def flush(self) -> Optional[ListBlock]:
        """Finalize pending items into a ListBlock and reset, or None if empty"""
        if not self.state.pending_items or self.state.kind is None:
            self.state = ListAccumulatorState()
            return None

        block = ListBlock(
            ordered=self.state.kind is ListKind.ORDERED,
            items=[inline_format(item) for item in self.state.pending_items],
        )
        self.state = ListAccumulatorState()
        return block


def heading_match(line: str) -> Optional[Heading]:
    """Return a Heading if the line starts with a heading marker"""
    for marker, level in HEADING_MARKERS:
        if line.startswith(marker):
            return Heading(level=level, content=inline_format(line[len(marker):]))
    return None


def markdown_format(text: str) -> List[Block]:
    """
    Segment analysis text into blocks

    Lines are split on "\\n" only and classified in priority order:
    "### ", "## ", "# ", unordered item, ordered item, blank, paragraph.
    A pending list is always flushed before a heading or paragraph is
    emitted, so a list directly followed by a heading keeps document order.

    Args:
        text: Raw analysis text

    Returns:
        Ordered list of Heading, ListBlock and Paragraph blocks
    """
    blocks: List[Block] = []
    accumulator = ListAccumulator()

    def pending_flush() -> None:
        flushed = accumulator.flush()
        if flushed is not None:
            blocks.append(flushed)

    for line in text.split("\n"):
        heading = heading_match(line)
        if heading is not None:
            pending_flush()
            blocks.append(heading)
            continue

        match = UNORDERED_ITEM.match(line)
        if match:
            flushed = accumulator.accept(ListKind.UNORDERED, line[match.end():])
            if flushed is not None:
                blocks.append(flushed)
            continue

        match = ORDERED_ITEM.match(line)
        if match:
            flushed = accumulator.accept(ListKind.ORDERED, line[match.end():])
            if flushed is not None:
                blocks.append(flushed)
            continue

        if line.strip() == "":
            pending_flush()
            continue

        pending_flush()
        blocks.append(Paragraph(content=inline_format(line)))

    pending_flush()
    return blocks


def inline_format(text: str) -> InlineSequence:
    """
    Split a block's text into plain, bold and italic nodes

    Each iteration searches the remaining text for a bold span first; the
    italic pattern is only tried when no bold span exists anywhere in the
    remainder. An italic span that precedes a bold span is therefore emitted
    as part of the plain text before the bold node.

    Args:
        text: Raw text of one heading, list item or paragraph

    Returns:
        Inline nodes in source order; empty list for empty text

    Example:
        >>> inline_format("**bold** and *italic*")
        [Bold(text='bold'), PlainText(text=' and '), Italic(text='italic')]
    """
    nodes: InlineSequence = []
    remaining = text

    while remaining:
        match = BOLD_SPAN.search(remaining)
        node_type = Bold
        if match is None:
            match = ITALIC_SPAN.search(remaining)
            node_type = Italic
        if match is None:
            nodes.append(PlainText(remaining))
            break

        if match.start() > 0:
            nodes.append(PlainText(remaining[:match.start()]))
        nodes.append(node_type(match.group(1)))
        remaining = remaining[match.end():]

    return nodes


def plainText_extract(blocks: Sequence[Block]) -> str:
    """
    Concatenate the text of every inline node across all blocks

    Block boundaries and list item boundaries add no separators, so the
    result is the input text with markers, delimiters, newlines and blank
    lines removed.
    """
    parts: List[str] = []
    for block in blocks:
        if isinstance(block, ListBlock):
            for item in block.items:
                parts.extend(node.text for node in item)
        else:
            parts.extend(node.text for node in block.content)
    return "".join(parts)
