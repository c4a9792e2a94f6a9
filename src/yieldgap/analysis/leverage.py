# src/yieldgap/analysis/leverage.py
from __future__ import annotations

from typing import List, Optional

from yieldgap.analysis.templates import recommendation_text
from yieldgap.domain.metrics import MetricRecord
from yieldgap.domain.standards import DEFAULT_STANDARDS, CcimFramework, DomainStandards
from yieldgap.domain.underwriting import (
    CashOnCashAnalysis,
    Flag,
    LeverageAnalysis,
    LoanConstantAnalysis,
    Recommendation,
    YieldRateAnalysis,
)

# strength -> (grade, risk)
_STRENGTH_GRADES: dict[str, tuple[str, str]] = {
    "excellent": ("A", "low"),
    "good": ("B", "low"),
    "moderate": ("C", "medium"),
    "weak": ("D", "medium"),
}


def yield_gap(metrics: MetricRecord) -> Optional[float]:
    """FCR - K%, in percentage points. None unless both are present."""
    if metrics.yield_rate is None or metrics.loan_constant is None:
        return None
    return metrics.yield_rate - metrics.loan_constant


def classify_yield_gap(
    gap: Optional[float],
    framework: CcimFramework = DEFAULT_STANDARDS.ccim,
) -> tuple[str, str, Optional[str], str]:
    """
    Bucket a yield gap against the CCIM leverage thresholds.

    Returns (leverage_type, strength, grade, risk):
      >= 1.5 excellent/A/low, >= 1.0 good/B/low, >= 0.5 moderate/C/medium,
      >= 0.0 weak/D/medium, below 0 negative/F/high.
    A missing gap is ("unknown", "unknown", None, "medium").
    """
    if gap is None:
        return "unknown", "unknown", None, "medium"

    for strength, floor in framework.leverage_thresholds:
        if gap >= floor:
            grade, risk = _STRENGTH_GRADES[strength]
            return "positive", strength, grade, risk

    return "negative", "negative", "F", "high"


def compute_stability_score(
    metrics: MetricRecord,
    gap: Optional[float],
    framework: CcimFramework = DEFAULT_STANDARDS.ccim,
) -> int:
    """
    0-100 score, base 50.

      DCR:        >= 1.50 +30, >= 1.35 +20, >= 1.25 +10, >= 1.20 +0, else -20
      BER:        <= 70 +20, <= 80 +15, <= 85 +10, <= 90 +5, else -10
      yield gap:  >= 2.0 +20, >= 1.0 +15, >= 0.5 +10, >= 0.0 +5, else -15

    Absent inputs contribute nothing.
    """
    score = 50.0

    dcr = metrics.debt_coverage_ratio
    if dcr is not None:
        dcr_std = framework.dcr_standards
        if dcr >= dcr_std.excellent:
            score += 30
        elif dcr >= dcr_std.good:
            score += 20
        elif dcr >= dcr_std.acceptable:
            score += 10
        elif dcr >= dcr_std.minimum:
            score += 0
        else:
            score -= 20

    ber = metrics.break_even_ratio
    if ber is not None:
        ber_std = framework.ber_standards
        if ber <= ber_std.excellent:
            score += 20
        elif ber <= ber_std.good:
            score += 15
        elif ber <= ber_std.acceptable:
            score += 10
        elif ber <= ber_std.risky:
            score += 5
        else:
            score -= 10

    if gap is not None:
        for floor, points in framework.stability_yield_gap_bands:
            if gap >= floor:
                score += points
                break
        else:
            score += framework.stability_negative_gap_points

    return int(max(0.0, min(100.0, score)))


# ---------------------------------------------------------------------
# Component analyses
# ---------------------------------------------------------------------

def _grade_yield_rate(fcr: float) -> str:
    if fcr >= 8:
        return "A"
    if fcr >= 6:
        return "B"
    if fcr >= 4:
        return "C"
    if fcr >= 2:
        return "D"
    return "F"


def _market_position(fcr: float, market_cap_rate: Optional[float]) -> str:
    if market_cap_rate is None:
        return "unknown"
    difference = fcr - market_cap_rate
    if difference >= 1.0:
        return "above_market"
    if difference >= -0.5:
        return "market_rate"
    return "below_market"


def _yield_rate_risk(fcr: float) -> str:
    if fcr < 3:
        return "high"
    if fcr < 5:
        return "medium"
    return "low"


def analyze_yield_rate(metrics: MetricRecord) -> Optional[YieldRateAnalysis]:
    fcr = metrics.yield_rate
    if fcr is None:
        return None
    return YieldRateAnalysis(
        value=fcr,
        grade=_grade_yield_rate(fcr),
        market_position=_market_position(fcr, metrics.market_cap_rate),
        risk=_yield_rate_risk(fcr),
    )


def refinancing_risk(loan_term: Optional[float]) -> str:
    if loan_term is None:
        return "unknown"
    if loan_term <= 3:
        return "high"
    if loan_term <= 7:
        return "medium"
    return "low"


def analyze_loan_constant(metrics: MetricRecord) -> Optional[LoanConstantAnalysis]:
    """
    K% split into interest and amortisation.
    A K% well above the note rate means heavy principal paydown.
    """
    k = metrics.loan_constant
    if k is None:
        return None

    rate = metrics.interest_rate
    if rate is None:
        spread_label = "unknown"
    else:
        spread = k - rate
        if spread > 2:
            spread_label = "high_amortization"
        elif spread > 1:
            spread_label = "moderate_amortization"
        else:
            spread_label = "low_amortization"

    return LoanConstantAnalysis(
        value=k,
        interest_rate=rate,
        amortization_effect=k - (rate if rate is not None else 0.0),
        amortization_spread=spread_label,
        refinancing_risk=refinancing_risk(metrics.loan_term),
    )


def _ccr_sustainability(metrics: MetricRecord, framework: CcimFramework) -> str:
    dcr = metrics.debt_coverage_ratio
    ber = metrics.break_even_ratio
    if dcr is None or ber is None:
        return "unknown"
    dcr_std, ber_std = framework.dcr_standards, framework.ber_standards
    if dcr >= dcr_std.good and ber <= ber_std.good:
        return "high"
    if dcr >= dcr_std.acceptable and ber <= ber_std.acceptable:
        return "medium"
    return "low"


def _tax_efficiency(metrics: MetricRecord) -> str:
    btcf = metrics.before_tax_cash_flow
    atcf = metrics.after_tax_cash_flow
    if btcf is None or atcf is None or btcf == 0:
        return "unknown"
    tax_impact = (btcf - atcf) / btcf
    if tax_impact <= 0.15:
        return "efficient"
    if tax_impact <= 0.25:
        return "moderate"
    return "inefficient"


def analyze_cash_on_cash(
    metrics: MetricRecord,
    framework: CcimFramework = DEFAULT_STANDARDS.ccim,
) -> Optional[CashOnCashAnalysis]:
    ccr = metrics.cash_on_cash_return
    if ccr is None:
        return None
    fcr = metrics.yield_rate
    return CashOnCashAnalysis(
        value=ccr,
        leverage_contribution=ccr - fcr if fcr is not None else None,
        sustainability=_ccr_sustainability(metrics, framework),
        tax_efficiency=_tax_efficiency(metrics),
    )


# ---------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------

def leverage_recommendations(
    metrics: MetricRecord,
    leverage_type: str,
    strength: str,
    framework: CcimFramework = DEFAULT_STANDARDS.ccim,
    language: str = "ja",
) -> List[Recommendation]:
    codes: List[str] = []

    if leverage_type == "positive":
        if strength == "excellent":
            codes.append("LEVERAGE_EXCELLENT")
        elif strength == "good":
            codes.append("LEVERAGE_GOOD")
        else:
            codes.append("LEVERAGE_LIMITED")
    elif leverage_type == "negative":
        codes.append("LEVERAGE_NEGATIVE")

    dcr = metrics.debt_coverage_ratio
    if dcr is not None:
        if dcr < framework.dcr_standards.minimum:
            codes.append("DCR_BELOW_MINIMUM")
        elif dcr >= framework.dcr_standards.excellent:
            codes.append("DCR_EXCELLENT")

    ber = metrics.break_even_ratio
    if ber is not None and ber > framework.ber_standards.risky:
        codes.append("BER_HIGH")

    return [Recommendation(code=code, text=recommendation_text(code, language)) for code in codes]


def analyze_leverage(
    metrics: MetricRecord,
    standards: DomainStandards = DEFAULT_STANDARDS,
    language: str = "ja",
) -> LeverageAnalysis:
    """
    CCIM leverage classification over validated metrics.

    - yield gap = FCR - K%, bucketed by the leverage thresholds
    - leverage effect = CCR - FCR, cross-checked against the gap sign
    - stability score, component analyses, template recommendations
    """
    framework = standards.ccim
    gap = yield_gap(metrics)
    leverage_type, strength, grade, risk = classify_yield_gap(gap, framework)

    effect: Optional[float] = None
    warnings: List[Flag] = []
    if metrics.cash_on_cash_return is not None and metrics.yield_rate is not None:
        effect = metrics.cash_on_cash_return - metrics.yield_rate
        if gap is not None and (gap > 0) != (effect > 0):
            warnings.append(
                Flag(
                    code="LEVERAGE_EFFECT_SIGN_MISMATCH",
                    message="Yield gap and leverage effect (CCR - FCR) point in opposite directions.",
                    context={"yield_gap": gap, "leverage_effect": effect},
                )
            )

    return LeverageAnalysis(
        yield_gap=gap,
        leverage_type=leverage_type,
        leverage_strength=strength,
        leverage_grade=grade,
        leverage_risk=risk,
        leverage_effect=effect,
        stability_score=compute_stability_score(metrics, gap, framework),
        yield_rate_analysis=analyze_yield_rate(metrics),
        loan_constant_analysis=analyze_loan_constant(metrics),
        cash_on_cash_analysis=analyze_cash_on_cash(metrics, framework),
        recommendations=tuple(leverage_recommendations(metrics, leverage_type, strength, framework, language)),
        warnings=tuple(warnings),
    )
