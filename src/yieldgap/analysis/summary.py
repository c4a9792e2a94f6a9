# src/yieldgap/analysis/summary.py
from __future__ import annotations

from typing import List

from yieldgap.analysis.templates import STRENGTH_LABELS, recommendation_text, summary_text
from yieldgap.domain.metrics import MetricRecord
from yieldgap.domain.underwriting import (
    AnalysisResult,
    InvestmentRecommendation,
    KeyMetrics,
    LeverageAnalysis,
    ProfessionalSummary,
    QualityAssessment,
    RiskAnalysis,
    ValuationAnalysis,
)
from yieldgap.services.validation import validate_language


def key_metrics(metrics: MetricRecord, leverage: LeverageAnalysis) -> KeyMetrics:
    return KeyMetrics(
        yield_rate=metrics.yield_rate,
        loan_constant=metrics.loan_constant,
        cash_on_cash_return=metrics.cash_on_cash_return,
        debt_coverage_ratio=metrics.debt_coverage_ratio,
        break_even_ratio=metrics.break_even_ratio,
        yield_gap=leverage.yield_gap,
    )


def collect_risk_factors(risk: RiskAnalysis) -> List[str]:
    factors: List[str] = []
    for bucket in (risk.leverage_risk, risk.market_risk, risk.operational_risk, risk.financial_risk):
        factors.extend(bucket.factors)
    return factors


def professional_opinion(leverage: LeverageAnalysis, language: str = "ja") -> str:
    parts = [summary_text("opinion", language)]
    if leverage.leverage_grade is None:
        parts.append(summary_text("opinion_no_leverage", language))
    else:
        parts.append(
            summary_text(
                "opinion_leverage",
                language,
                strength=STRENGTH_LABELS[language][leverage.leverage_strength],
                grade=leverage.leverage_grade,
                score=leverage.stability_score,
            )
        )
    return " ".join(parts) if language == "en" else "".join(parts)


def build_professional_summary(
    metrics: MetricRecord,
    leverage: LeverageAnalysis,
    risk: RiskAnalysis,
    valuation: ValuationAnalysis,
    quality: QualityAssessment,
    language: str = "ja",
) -> ProfessionalSummary:
    """
    Assemble the headline block from already computed analyses.
    No new numbers are derived here beyond what the analyzers produced.
    """
    recommendation = InvestmentRecommendation(
        recommendation=valuation.recommendation_level,
        confidence=quality.confidence,
        reasoning=summary_text(
            "reasoning",
            language,
            completeness=quality.completeness,
            risk_grade=risk.overall_risk_grade,
        ),
    )

    return ProfessionalSummary(
        executive_summary=summary_text(
            "executive",
            language,
            recommendation=valuation.recommendation_level,
            grade=valuation.investment_grade,
        ),
        key_metrics=key_metrics(metrics, leverage),
        investment_recommendation=recommendation,
        risk_factors=tuple(collect_risk_factors(risk)),
        professional_opinion=professional_opinion(leverage, language),
    )


# =====================================================================
# Markdown report section
# =====================================================================

_REPORT_LABELS = {
    "ja": {
        "title": "# 1. Executive Summary（投資概要）",
        "address": "**物件所在地**: {address}",
        "station": "**最寄り駅**: {station}",
        "walk": " 徒歩{minutes}分",
        "leverage_heading": "## レバレッジ効果判定（CPM/CCIM基準）",
        "fcr": "**FCR（総収益率）**: {value:.2f}% （物件本来の収益力）",
        "k": "**K%（ローン定数）**: {value:.2f}% （借入コスト＋元本返済率）",
        "ccr": "**CCR（自己資金配当率）**: {value:.2f}% （投資家への初期リターン）",
        "gap": "**イールドギャップ（FCR - K%）**: {value:.2f}%",
        "positive": "**レバレッジ・タイプ判定**: ポジティブ・レバレッジ（正のレバレッジ）\n"
        "FCR > K% が成立し、借入が自己資金収益率を押し上げています。",
        "negative": "**レバレッジ・タイプ判定**: ネガティブ・レバレッジ（負のレバレッジ）\n"
        "FCR < K% となり、借入が自己資金収益率を引き下げています。",
        "safety_heading": "## 安全性・リスク指標",
        "dcr": "**DCR（借入金償還余裕率）**: {value:.2f}倍",
        "dcr_ok": " （金融機関基準をクリア）",
        "dcr_watch": " （金融機関基準に注意）",
        "ber": "**BER（損益分岐入居率）**: {value:.1f}%",
        "ber_excellent": " （優良水準）",
        "ber_standard": " （標準水準）",
        "ber_watch": " （要注意水準）",
        "decision_heading": "## CPM/CCIM専門家による投資判断",
        "recommendation": "**投資推奨度**: {value}",
        "grade": "**投資グレード**: {value}",
        "recommendations_heading": "## 専門家推奨事項",
    },
    "en": {
        "title": "# 1. Executive Summary",
        "address": "**Address**: {address}",
        "station": "**Nearest station**: {station}",
        "walk": ", {minutes} min walk",
        "leverage_heading": "## Leverage Assessment (CPM/CCIM)",
        "fcr": "**FCR (cap rate)**: {value:.2f}% (the property's unlevered return)",
        "k": "**K% (loan constant)**: {value:.2f}% (interest plus principal repayment)",
        "ccr": "**CCR (cash-on-cash return)**: {value:.2f}% (initial return on equity)",
        "gap": "**Yield gap (FCR - K%)**: {value:.2f}%",
        "positive": "**Leverage type**: positive leverage\n"
        "FCR > K%, so borrowing lifts the return on equity.",
        "negative": "**Leverage type**: negative leverage\n"
        "FCR < K%, so borrowing drags down the return on equity.",
        "safety_heading": "## Safety and Risk Indicators",
        "dcr": "**DCR (debt coverage ratio)**: {value:.2f}x",
        "dcr_ok": " (meets lender standard)",
        "dcr_watch": " (below lender standard)",
        "ber": "**BER (break-even occupancy)**: {value:.1f}%",
        "ber_excellent": " (excellent)",
        "ber_standard": " (standard)",
        "ber_watch": " (needs attention)",
        "decision_heading": "## CPM/CCIM Investment Decision",
        "recommendation": "**Recommendation**: {value}",
        "grade": "**Investment grade**: {value}",
        "recommendations_heading": "## Professional Recommendations",
    },
}


def render_report(result: AnalysisResult, language: str = "ja") -> str:
    """
    Markdown fragment for inclusion in a larger report.

    Pure formatting over `result`: the same result and language always give
    byte-identical text.
    An unsupported language raises ValueError.
    """
    labels = _REPORT_LABELS[validate_language(language)]
    summary = result.professional_summary
    km = summary.key_metrics
    prop = result.property_attributes

    lines: List[str] = [labels["title"], ""]

    if prop.address is not None:
        lines.append(labels["address"].format(address=prop.address))
    if prop.nearest_station is not None:
        station = labels["station"].format(station=prop.nearest_station)
        if prop.walking_minutes is not None:
            station += labels["walk"].format(minutes=prop.walking_minutes)
        lines.append(station)

    lines += ["", labels["leverage_heading"], ""]
    if km.yield_rate is not None:
        lines.append(labels["fcr"].format(value=km.yield_rate))
    if km.loan_constant is not None:
        lines.append(labels["k"].format(value=km.loan_constant))
    if km.cash_on_cash_return is not None:
        lines.append(labels["ccr"].format(value=km.cash_on_cash_return))
    if km.yield_gap is not None:
        lines.append(labels["gap"].format(value=km.yield_gap))
        lines.append(labels["positive"] if km.yield_gap >= 0 else labels["negative"])

    lines += ["", labels["safety_heading"], ""]
    if km.debt_coverage_ratio is not None:
        qualifier = labels["dcr_ok"] if km.debt_coverage_ratio >= 1.25 else labels["dcr_watch"]
        lines.append(labels["dcr"].format(value=km.debt_coverage_ratio) + qualifier)
    if km.break_even_ratio is not None:
        if km.break_even_ratio <= 80:
            qualifier = labels["ber_excellent"]
        elif km.break_even_ratio <= 85:
            qualifier = labels["ber_standard"]
        else:
            qualifier = labels["ber_watch"]
        lines.append(labels["ber"].format(value=km.break_even_ratio) + qualifier)

    lines += ["", labels["decision_heading"], ""]
    lines.append(labels["recommendation"].format(value=summary.investment_recommendation.recommendation))
    lines.append(labels["grade"].format(value=result.valuation_analysis.investment_grade))
    lines.append(professional_opinion(result.leverage_analysis, language))

    recommendations = result.leverage_analysis.recommendations
    if recommendations:
        lines += ["", labels["recommendations_heading"], ""]
        for index, rec in enumerate(recommendations, start=1):
            lines.append(f"{index}. {recommendation_text(rec.code, language)}")

    return "\n".join(lines) + "\n"
