"""
Models package for ledgerdown

Contains data structures and type definitions for the formatter and the
compilation pipeline.
"""

from .state import ProgramState, pipeline
from .blocks import Block, Heading, ListBlock, Paragraph, PlainText, Bold, Italic, ListKind, ListAccumulatorState
from .renderers import RendererSpec, RendererCategory
from .summary import AIAnalysis, CategorySummary, MonthlySummary, TransactionRecord, month_validate

__all__ = [
    "ProgramState",
    "pipeline",
    "Block",
    "Heading",
    "ListBlock",
    "Paragraph",
    "PlainText",
    "Bold",
    "Italic",
    "ListKind",
    "ListAccumulatorState",
    "RendererSpec",
    "RendererCategory",
    "AIAnalysis",
    "CategorySummary",
    "MonthlySummary",
    "TransactionRecord",
    "month_validate",
]
