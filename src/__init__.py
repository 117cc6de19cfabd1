"""
ledgerdown - Monthly finance summary report compiler

Formats AI-generated monthly analysis text and renders it, together with
the month's totals, into a standalone HTML report.
"""

__version__ = "1.0.0"

from .lib import Compiler, RendererRegistry, LOG, state_connectToLogger, markdown_format, inline_format

__all__ = [
    "Compiler",
    "RendererRegistry",
    "LOG",
    "state_connectToLogger",
    "markdown_format",
    "inline_format",
    "__version__",
]
