# src/yieldgap/api/schemas.py
from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict


# --------------------------------------------
# Analyze (typed endpoint)
# --------------------------------------------

ReportLanguage = Literal["ja", "en"]


class AnalyzeRequest(BaseModel):
    """
    Typed request for /analyze.

    `text` is the main document; `auxiliary_text` is text already pulled
    out of an attached file (PDF, spreadsheet, ...) and is scanned the same way.
    """
    model_config = ConfigDict(extra="forbid")

    text: str
    auxiliary_text: Optional[str] = None
    include_report: bool = True
    language: Optional[ReportLanguage] = None


class AnalyzeResponse(BaseModel):
    """
    Serialized AnalysisResult plus the optional markdown report.
    Permissive so new result fields do not break clients.
    """
    model_config = ConfigDict(extra="allow")

    result: dict[str, Any]
    report: Optional[str] = None
