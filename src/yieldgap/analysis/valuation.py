# src/yieldgap/analysis/valuation.py
from __future__ import annotations

from yieldgap.domain.metrics import MetricRecord
from yieldgap.domain.standards import DEFAULT_STANDARDS, CcimFramework, DomainStandards
from yieldgap.domain.underwriting import ValuationAnalysis


def investment_grade(metrics: MetricRecord, framework: CcimFramework = DEFAULT_STANDARDS.ccim) -> str:
    """
    Decision table (default thresholds):
      A: NPV > 0, DCR >= 1.25, BER <= 85
      B: NPV > 0, DCR >= 1.20
      C: DCR >= 1.15
      D: otherwise
    Missing inputs fail the condition they appear in.
    """
    t = framework.valuation
    npv = metrics.npv
    dcr = metrics.debt_coverage_ratio
    ber = metrics.break_even_ratio

    npv_positive = npv is not None and npv > 0
    if npv_positive and dcr is not None and dcr >= t.grade_a_dcr and ber is not None and ber <= t.grade_a_ber:
        return "A"
    if npv_positive and dcr is not None and dcr >= t.grade_b_dcr:
        return "B"
    if dcr is not None and dcr >= t.grade_c_dcr:
        return "C"
    return "D"


def analyze_valuation(
    metrics: MetricRecord,
    standards: DomainStandards = DEFAULT_STANDARDS,
) -> ValuationAnalysis:
    value_creation = metrics.npv is not None and metrics.npv > 0
    return ValuationAnalysis(
        npv=metrics.npv,
        discount_rate=metrics.discount_rate,
        investment_grade=investment_grade(metrics, standards.ccim),
        value_creation=value_creation,
        recommendation_level="RECOMMENDED" if value_creation else "NOT_RECOMMENDED",
    )
