# src/yieldgap/analysis/quality.py
from __future__ import annotations

from yieldgap.domain.metrics import MetricRecord
from yieldgap.domain.underwriting import QualityAssessment

CRITICAL_FIELDS: tuple[str, ...] = (
    "yield_rate",
    "loan_constant",
    "cash_on_cash_return",
    "debt_coverage_ratio",
    "break_even_ratio",
    "price",
    "loan_amount",
    "equity",
    "net_operating_income",
    "annual_debt_service",
)

SECONDARY_FIELDS: tuple[str, ...] = (
    "levered_irr",
    "unlevered_irr",
    "npv",
    "discount_rate",
    "operating_expenses",
    "interest_rate",
    "loan_term",
)

CRITICAL_WEIGHT = 0.7
SECONDARY_WEIGHT = 0.3
MAX_MISSING_REPORTED = 5


def assess_quality(metrics: MetricRecord) -> QualityAssessment:
    """
    Weighted completeness: 70% critical-field coverage + 30% secondary coverage.

    confidence: high >= 80, medium >= 60, otherwise low.
    """
    values = metrics.model_dump()

    missing = [name for name in CRITICAL_FIELDS if values[name] is None]
    critical_pct = (len(CRITICAL_FIELDS) - len(missing)) / len(CRITICAL_FIELDS) * 100.0

    secondary_found = sum(1 for name in SECONDARY_FIELDS if values[name] is not None)
    secondary_pct = secondary_found / len(SECONDARY_FIELDS) * 100.0

    overall = critical_pct * CRITICAL_WEIGHT + secondary_pct * SECONDARY_WEIGHT

    if overall >= 80:
        confidence = "high"
    elif overall >= 60:
        confidence = "medium"
    else:
        confidence = "low"

    return QualityAssessment(
        completeness=int(round(overall)),
        confidence=confidence,
        missing_critical=tuple(missing[:MAX_MISSING_REPORTED]),
    )
