from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from yieldgap.domain.metrics import MetricRecord, PropertyAttributes

Level = Literal["low", "medium", "high"]
Confidence = Literal["low", "medium", "high"]
LeverageType = Literal["positive", "negative", "unknown"]
LeverageStrength = Literal["excellent", "good", "moderate", "weak", "negative", "unknown"]
Grade = Literal["A", "B", "C", "D", "F"]
RecommendationLevel = Literal["RECOMMENDED", "NOT_RECOMMENDED"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Flag(_Frozen):
    """Non-fatal diagnostic attached to a result; never raised."""
    code: str
    severity: Literal["warning", "error"] = "warning"
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


class QualityAssessment(_Frozen):
    completeness: int = Field(..., ge=0, le=100)
    confidence: Confidence
    missing_critical: Tuple[str, ...] = Field(default=(), max_length=5)


# ---------------------------------------------------------------------
# Leverage
# ---------------------------------------------------------------------

class YieldRateAnalysis(_Frozen):
    value: float
    grade: Grade
    market_position: Literal["above_market", "market_rate", "below_market", "unknown"]
    risk: Level


class LoanConstantAnalysis(_Frozen):
    value: float
    interest_rate: Optional[float] = None
    amortization_effect: float
    amortization_spread: Literal["high_amortization", "moderate_amortization", "low_amortization", "unknown"]
    refinancing_risk: Literal["low", "medium", "high", "unknown"]


class CashOnCashAnalysis(_Frozen):
    value: float
    leverage_contribution: Optional[float] = None
    sustainability: Literal["low", "medium", "high", "unknown"]
    tax_efficiency: Literal["efficient", "moderate", "inefficient", "unknown"]


class Recommendation(_Frozen):
    code: str
    text: str


class LeverageAnalysis(_Frozen):
    yield_gap: Optional[float] = None
    leverage_type: LeverageType = "unknown"
    leverage_strength: LeverageStrength = "unknown"
    leverage_grade: Optional[Grade] = None
    leverage_risk: Level = "medium"
    leverage_effect: Optional[float] = None
    stability_score: int = Field(default=50, ge=0, le=100)

    yield_rate_analysis: Optional[YieldRateAnalysis] = None
    loan_constant_analysis: Optional[LoanConstantAnalysis] = None
    cash_on_cash_analysis: Optional[CashOnCashAnalysis] = None

    recommendations: Tuple[Recommendation, ...] = ()
    warnings: Tuple[Flag, ...] = ()


# ---------------------------------------------------------------------
# IRR / risk / valuation
# ---------------------------------------------------------------------

class IRRAnalysis(_Frozen):
    levered_irr: Optional[float] = None
    unlevered_irr: Optional[float] = None
    leverage_effect: Optional[float] = None
    levered_irr_after_tax: Optional[float] = None
    unlevered_irr_after_tax: Optional[float] = None
    tax_leverage_effect: Optional[float] = None
    benchmark_profile: Optional[str] = None
    meets_target: Optional[bool] = None


class RiskBucket(_Frozen):
    level: Level = "medium"
    factors: Tuple[str, ...] = ()


class RiskAnalysis(_Frozen):
    leverage_risk: RiskBucket
    market_risk: RiskBucket
    operational_risk: RiskBucket
    financial_risk: RiskBucket
    overall_risk_grade: Literal["A", "B", "C", "D"]


class ValuationAnalysis(_Frozen):
    npv: Optional[float] = None
    discount_rate: Optional[float] = None
    investment_grade: Literal["A", "B", "C", "D"]
    value_creation: bool
    recommendation_level: RecommendationLevel


# ---------------------------------------------------------------------
# Summary & aggregate
# ---------------------------------------------------------------------

class KeyMetrics(_Frozen):
    yield_rate: Optional[float] = None
    loan_constant: Optional[float] = None
    cash_on_cash_return: Optional[float] = None
    debt_coverage_ratio: Optional[float] = None
    break_even_ratio: Optional[float] = None
    yield_gap: Optional[float] = None


class InvestmentRecommendation(_Frozen):
    recommendation: RecommendationLevel
    confidence: Confidence
    reasoning: str


class ProfessionalSummary(_Frozen):
    executive_summary: str
    key_metrics: KeyMetrics
    investment_recommendation: InvestmentRecommendation
    risk_factors: Tuple[str, ...] = ()
    professional_opinion: str


class AnalysisResult(_Frozen):
    """One immutable result per input text."""
    extracted_metrics: MetricRecord
    validated_metrics: MetricRecord
    property_attributes: PropertyAttributes
    leverage_analysis: LeverageAnalysis
    irr_analysis: IRRAnalysis
    risk_analysis: RiskAnalysis
    valuation_analysis: ValuationAnalysis
    professional_summary: ProfessionalSummary
    quality: QualityAssessment
    warnings: Tuple[Flag, ...] = ()
    created_at: datetime
    engine_version: str
