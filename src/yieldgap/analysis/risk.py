# src/yieldgap/analysis/risk.py
from __future__ import annotations

from typing import List, Optional

from yieldgap.analysis.leverage import refinancing_risk
from yieldgap.analysis.templates import risk_factor_text
from yieldgap.domain.metrics import MetricRecord, PropertyAttributes
from yieldgap.domain.standards import DEFAULT_STANDARDS, DomainStandards
from yieldgap.domain.underwriting import LeverageAnalysis, RiskAnalysis, RiskBucket

_LEVEL_ORDER = {"low": 0, "medium": 1, "high": 2}


class _BucketBuilder:
    """
    Collects (level, factor) observations for one risk dimension.

    The bucket level is the worst observed level. A bucket that saw no
    evidence at all stays "medium" with no factors.
    """

    def __init__(self, language: str) -> None:
        self.language = language
        self.levels: List[str] = []
        self.factors: List[str] = []

    def observe(self, level: str, code: Optional[str] = None, **values) -> None:
        self.levels.append(level)
        if code is not None:
            self.factors.append(risk_factor_text(code, self.language, **values))

    def build(self) -> RiskBucket:
        if not self.levels:
            return RiskBucket()
        level = max(self.levels, key=_LEVEL_ORDER.__getitem__)
        return RiskBucket(level=level, factors=tuple(self.factors))


def _leverage_bucket(metrics: MetricRecord, leverage: LeverageAnalysis, language: str) -> RiskBucket:
    bucket = _BucketBuilder(language)

    if leverage.yield_gap is not None:
        if leverage.leverage_type == "negative":
            bucket.observe(leverage.leverage_risk, "NEGATIVE_LEVERAGE", yield_gap=leverage.yield_gap)
        else:
            bucket.observe(leverage.leverage_risk)

    ltv = metrics.ltv
    if ltv is not None:
        if ltv > 0.8:
            bucket.observe("high", "LTV_VERY_HIGH", ltv=ltv)
        elif ltv > 0.7:
            bucket.observe("medium", "LTV_HIGH", ltv=ltv)
        else:
            bucket.observe("low")

    return bucket.build()


def _market_bucket(metrics: MetricRecord, standards: DomainStandards, language: str) -> RiskBucket:
    bucket = _BucketBuilder(language)
    fcr = metrics.yield_rate

    if fcr is not None and metrics.market_cap_rate is not None:
        if fcr - metrics.market_cap_rate < -0.5:
            bucket.observe("medium", "BELOW_MARKET_YIELD", yield_rate=fcr, market_cap_rate=metrics.market_cap_rate)
        else:
            bucket.observe("low")

    vacancy = metrics.market_vacancy_rate
    if vacancy is not None:
        bands = standards.cpm.vacancy_rates
        if vacancy > bands.poor * 100:
            bucket.observe("high", "MARKET_VACANCY_HIGH", vacancy=vacancy)
        elif vacancy > bands.average * 100:
            bucket.observe("medium", "MARKET_VACANCY_ELEVATED", vacancy=vacancy)
        else:
            bucket.observe("low")

    if fcr is not None and metrics.exit_cap_rate is not None:
        spread = metrics.exit_cap_rate - fcr
        if spread >= standards.ccim.cap_rate_stress_test:
            bucket.observe("high", "EXIT_CAP_EXPANSION", spread=spread)
        elif spread >= standards.ccim.cap_rate_expansion_risk:
            bucket.observe("medium", "EXIT_CAP_EXPANSION", spread=spread)
        else:
            bucket.observe("low")

    return bucket.build()


def _operational_bucket(
    metrics: MetricRecord,
    prop: PropertyAttributes,
    standards: DomainStandards,
    language: str,
) -> RiskBucket:
    bucket = _BucketBuilder(language)
    cpm = standards.cpm

    ratio = metrics.operating_expense_ratio
    band = cpm.operating_expense_ratios.get(prop.category)
    if ratio is not None and band is not None:
        if ratio > band.max * 100:
            bucket.observe("medium", "OPEX_ABOVE_RANGE", ratio=ratio)
        elif ratio < band.min * 100:
            bucket.observe("medium", "OPEX_BELOW_RANGE", ratio=ratio)
        else:
            bucket.observe("low")

    ber = metrics.break_even_ratio
    if ber is not None:
        ber_std = standards.ccim.ber_standards
        if ber > ber_std.dangerous:
            bucket.observe("high", "BER_DANGEROUS", ber=ber)
        elif ber > ber_std.risky:
            bucket.observe("medium", "BER_RISKY", ber=ber)
        else:
            bucket.observe("low")

    if prop.age is not None:
        if cpm.is_aged(prop.age):
            bucket.observe("medium", "AGING_BUILDING", age=prop.age)
        else:
            bucket.observe("low")

    fee = metrics.management_fee
    egi = metrics.effective_gross_income
    typical_fee = cpm.management_fees.get(prop.category)
    if fee is not None and egi and typical_fee is not None:
        fee_ratio = fee / egi
        if fee_ratio > typical_fee:
            bucket.observe("medium", "MANAGEMENT_FEE_HIGH", fee=fee_ratio * 100)
        else:
            bucket.observe("low")

    return bucket.build()


def _financial_bucket(metrics: MetricRecord, standards: DomainStandards, language: str) -> RiskBucket:
    bucket = _BucketBuilder(language)

    dcr = metrics.debt_coverage_ratio
    if dcr is not None:
        dcr_std = standards.ccim.dcr_standards
        if dcr < dcr_std.risky:
            bucket.observe("high", "DCR_BELOW_RISKY", dcr=dcr)
        elif dcr < dcr_std.minimum:
            bucket.observe("high", "DCR_BELOW_MINIMUM", dcr=dcr)
        elif dcr < dcr_std.acceptable:
            bucket.observe("medium", "DCR_BELOW_ACCEPTABLE", dcr=dcr)
        else:
            bucket.observe("low")

    term = metrics.loan_term
    refi = refinancing_risk(term)
    if refi == "high":
        bucket.observe("high", "REFINANCING_SHORT_TERM", term=term)
    elif refi == "medium":
        bucket.observe("medium", "REFINANCING_MEDIUM_TERM", term=term)
    elif refi == "low":
        bucket.observe("low")

    return bucket.build()


def overall_risk_grade(buckets: List[RiskBucket]) -> str:
    """
    A: no high and at most one medium
    B: no high
    C: exactly one high
    D: two or more high
    """
    highs = sum(1 for b in buckets if b.level == "high")
    mediums = sum(1 for b in buckets if b.level == "medium")
    if highs >= 2:
        return "D"
    if highs == 1:
        return "C"
    if mediums <= 1:
        return "A"
    return "B"


def analyze_risk(
    metrics: MetricRecord,
    leverage: LeverageAnalysis,
    prop: PropertyAttributes,
    standards: DomainStandards = DEFAULT_STANDARDS,
    language: str = "ja",
) -> RiskAnalysis:
    leverage_risk = _leverage_bucket(metrics, leverage, language)
    market_risk = _market_bucket(metrics, standards, language)
    operational_risk = _operational_bucket(metrics, prop, standards, language)
    financial_risk = _financial_bucket(metrics, standards, language)

    return RiskAnalysis(
        leverage_risk=leverage_risk,
        market_risk=market_risk,
        operational_risk=operational_risk,
        financial_risk=financial_risk,
        overall_risk_grade=overall_risk_grade([leverage_risk, market_risk, operational_risk, financial_risk]),
    )
