# src/yieldgap/api/http.py
from __future__ import annotations

from fastapi import FastAPI, HTTPException

from yieldgap.adapters.config import config
from yieldgap.adapters.logging_utils import get_logger
from yieldgap.analysis.summary import render_report
from yieldgap.api.schemas import AnalyzeRequest, AnalyzeResponse
from yieldgap.domain.standards import DEFAULT_STANDARDS
from yieldgap.services.engine import analyze_text

logger = get_logger(__name__)

app = FastAPI(title="yieldgap", version=config.ENGINE_VERSION)


@app.post("/analyze", response_model=AnalyzeResponse)
def analyze_endpoint(payload: AnalyzeRequest) -> AnalyzeResponse:
    """
    Run the CPM/CCIM pipeline over the submitted text.
    Invalid input becomes a 400; missing metrics are never an error.
    """
    language = payload.language or config.REPORT_LANGUAGE
    try:
        result = analyze_text(
            payload.text,
            payload.auxiliary_text,
            standards=DEFAULT_STANDARDS,
            settings=config,
            language=language,
        )
    except ValueError as e:
        logger.warning("analyze_rejected", extra={"context": {"error": str(e)}})
        raise HTTPException(status_code=400, detail=str(e)) from e

    report = render_report(result, language) if payload.include_report else None
    return AnalyzeResponse(result=result.model_dump(mode="json"), report=report)


@app.get("/standards")
def standards_endpoint() -> dict:
    """The CPM/CCIM threshold tables the engine is running with."""
    return DEFAULT_STANDARDS.model_dump(mode="json")
