# src/yieldgap/services/engine.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from yieldgap.adapters.config import AppConfig, config
from yieldgap.adapters.logging_utils import get_logger
from yieldgap.analysis.imputation import impute_metrics
from yieldgap.analysis.irr import analyze_irr
from yieldgap.analysis.leverage import analyze_leverage
from yieldgap.analysis.quality import assess_quality
from yieldgap.analysis.risk import analyze_risk
from yieldgap.analysis.summary import build_professional_summary
from yieldgap.analysis.valuation import analyze_valuation
from yieldgap.domain.standards import DEFAULT_STANDARDS, DomainStandards
from yieldgap.domain.underwriting import AnalysisResult
from yieldgap.extraction.extractor import extract
from yieldgap.extraction.normalize import CurrencyScale
from yieldgap.services.guardrails import check_consistency
from yieldgap.services.validation import validate_input_text, validate_language, validate_optional_text

logger = get_logger(__name__)


def analyze_text(
    text: Any,
    auxiliary_text: Any = None,
    *,
    standards: DomainStandards = DEFAULT_STANDARDS,
    scale: Optional[CurrencyScale] = None,
    settings: AppConfig = config,
    language: Optional[str] = None,
    now: Optional[datetime] = None,
) -> AnalysisResult:
    """
    Full pipeline for one document:

      extract -> impute -> consistency check -> quality
        -> leverage -> IRR -> risk -> valuation -> summary

    Every stage is a pure function of its inputs; `standards` and `scale`
    are passed explicitly so callers (and tests) can swap threshold tables.
    Raises ValueError only for non-text input.
    """
    text = validate_input_text(text)
    auxiliary_text = validate_optional_text(auxiliary_text)
    language = validate_language(language or settings.REPORT_LANGUAGE)
    if scale is None:
        scale = CurrencyScale.from_config(settings)

    extracted, prop = extract(text, auxiliary_text, scale=scale)
    validated = impute_metrics(extracted, prop, standards)
    consistency_flags = check_consistency(validated, standards)
    quality = assess_quality(extracted)

    leverage = analyze_leverage(validated, standards, language)
    irr = analyze_irr(validated, standards)
    risk = analyze_risk(validated, leverage, prop, standards, language)
    valuation = analyze_valuation(validated, standards)
    summary = build_professional_summary(validated, leverage, risk, valuation, quality, language)

    result = AnalysisResult(
        extracted_metrics=extracted,
        validated_metrics=validated,
        property_attributes=prop,
        leverage_analysis=leverage,
        irr_analysis=irr,
        risk_analysis=risk,
        valuation_analysis=valuation,
        professional_summary=summary,
        quality=quality,
        warnings=tuple(consistency_flags) + leverage.warnings,
        created_at=now or datetime.now(timezone.utc),
        engine_version=settings.ENGINE_VERSION,
    )

    logger.info(
        "analysis_complete",
        extra={
            "context": {
                "completeness": quality.completeness,
                "confidence": quality.confidence,
                "leverage_type": leverage.leverage_type,
                "leverage_grade": leverage.leverage_grade,
                "investment_grade": valuation.investment_grade,
                "warnings": len(result.warnings),
            }
        },
    )
    return result
