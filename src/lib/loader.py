"""
Loaders for summary and analysis input documents

Reads the JSON documents fetched from the finance tracker backend and
validates them into models.summary objects.
"""

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..models.summary import AIAnalysis, MonthlySummary
from .log import LOG


class SummaryError(Exception):
    """Raised when an input document cannot be read or validated"""
    pass


def json_read(path: Path) -> object:
    """Read and decode a JSON file, raising SummaryError on failure"""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SummaryError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SummaryError(f"Invalid JSON in {path}: {e}") from e


def summary_load(path: Path) -> MonthlySummary:
    """
    Load a monthly summary document

    Args:
        path: JSON file in the GET /api/summary response shape

    Returns:
        Validated MonthlySummary

    Raises:
        SummaryError: If the file is unreadable or fails validation
    """
    data = json_read(path)
    try:
        summary = MonthlySummary.model_validate(data)
    except ValidationError as e:
        raise SummaryError(f"Invalid summary document {path}:\n{e}") from e
    LOG(f"Loaded summary for {summary.month} with {len(summary.categories)} categories", level=2)
    return summary


def analysis_load(path: Path, month: Optional[str] = None) -> AIAnalysis:
    """
    Load an AI analysis document

    A .json file must have the POST /api/summary/ai-analysis response shape.
    Any other file is taken as the raw analysis text; its month is the
    month argument (normally the summary's month).

    Args:
        path: Analysis file
        month: Month to use for non-JSON files

    Returns:
        Validated AIAnalysis

    Raises:
        SummaryError: If the file is unreadable or fails validation
    """
    if path.suffix.lower() == ".json":
        data = json_read(path)
    else:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise SummaryError(f"Cannot read {path}: {e}") from e
        data = {"analysis": text, "month": month or ""}

    try:
        analysis = AIAnalysis.model_validate(data)
    except ValidationError as e:
        raise SummaryError(f"Invalid analysis document {path}:\n{e}") from e
    LOG(f"Loaded analysis for {analysis.month}: {len(analysis.analysis)} characters", level=2)
    return analysis
