"""
ledgerdown library: formatter, renderers, compiler and logging
"""

from .formatter import markdown_format, inline_format, plainText_extract, ListAccumulator
from .renderers import RendererRegistry
from .compiler import Compiler
from .log import LOG, state_connectToLogger

__all__ = [
    "markdown_format",
    "inline_format",
    "plainText_extract",
    "ListAccumulator",
    "RendererRegistry",
    "Compiler",
    "LOG",
    "state_connectToLogger",
]
