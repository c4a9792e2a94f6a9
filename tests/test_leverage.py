# tests/test_leverage.py
import pytest
from hypothesis import given, strategies as st

from yieldgap.analysis.leverage import (
    analyze_cash_on_cash,
    analyze_leverage,
    classify_yield_gap,
    compute_stability_score,
    yield_gap,
)
from yieldgap.domain.metrics import MetricRecord
from yieldgap.domain.standards import BerStandards, CcimFramework, DcrStandards


@pytest.mark.parametrize(
    "gap, expected",
    [
        (2.3, ("positive", "excellent", "A", "low")),
        (1.5, ("positive", "excellent", "A", "low")),
        (1.49999, ("positive", "good", "B", "low")),
        (1.0, ("positive", "good", "B", "low")),
        (0.5, ("positive", "moderate", "C", "medium")),
        (0.0, ("positive", "weak", "D", "medium")),
        (-0.01, ("negative", "negative", "F", "high")),
        (None, ("unknown", "unknown", None, "medium")),
    ],
)
def test_classify_yield_gap_buckets(gap, expected):
    assert classify_yield_gap(gap) == expected


def test_fcr_and_k_only_gives_grade_a():
    la = analyze_leverage(MetricRecord(yield_rate=8.5, loan_constant=6.2))
    assert la.yield_gap == pytest.approx(2.3)
    assert la.leverage_type == "positive"
    assert la.leverage_grade == "A"
    assert la.leverage_effect is None
    assert la.warnings == ()


def test_missing_loan_constant_stays_unknown():
    la = analyze_leverage(MetricRecord(yield_rate=8.5, cash_on_cash_return=10.0))
    assert la.yield_gap is None
    assert la.leverage_type == "unknown"
    assert la.leverage_grade is None
    assert la.leverage_risk == "medium"
    # leverage effect only needs CCR and FCR
    assert la.leverage_effect == pytest.approx(1.5)
    assert [r.code for r in la.recommendations] == []


def test_sign_mismatch_between_gap_and_effect_is_a_warning():
    la = analyze_leverage(MetricRecord(yield_rate=8.0, loan_constant=6.0, cash_on_cash_return=7.0))
    assert la.leverage_effect == pytest.approx(-1.0)
    assert [w.code for w in la.warnings] == ["LEVERAGE_EFFECT_SIGN_MISMATCH"]


def test_dcr_below_minimum_costs_twenty_points():
    m = MetricRecord(debt_coverage_ratio=0.9)
    assert compute_stability_score(m, None) == 30


@pytest.mark.parametrize(
    "dcr, points",
    [(1.50, 30), (1.35, 20), (1.25, 10), (1.20, 0), (1.19, -20)],
)
def test_dcr_bands(dcr, points):
    assert compute_stability_score(MetricRecord(debt_coverage_ratio=dcr), None) == 50 + points


@pytest.mark.parametrize(
    "ber, points",
    [(70.0, 20), (80.0, 15), (85.0, 10), (90.0, 5), (90.1, -10)],
)
def test_ber_bands(ber, points):
    assert compute_stability_score(MetricRecord(break_even_ratio=ber), None) == 50 + points


@pytest.mark.parametrize(
    "gap, points",
    [(2.0, 20), (1.0, 15), (0.5, 10), (0.0, 5), (-0.1, -15)],
)
def test_yield_gap_bands(gap, points):
    assert compute_stability_score(MetricRecord(), gap) == 50 + points


def test_stability_score_is_clamped():
    best = MetricRecord(debt_coverage_ratio=2.0, break_even_ratio=60.0)
    assert compute_stability_score(best, 3.0) == 100

    worst = MetricRecord(debt_coverage_ratio=0.8, break_even_ratio=99.0)
    assert compute_stability_score(worst, -2.0) == 5
    harsher = CcimFramework(stability_negative_gap_points=-100.0)
    assert compute_stability_score(worst, -2.0, harsher) == 0


def test_recommendations_follow_thresholds():
    m = MetricRecord(yield_rate=4.2, loan_constant=4.9, debt_coverage_ratio=1.15, break_even_ratio=92.0)
    la = analyze_leverage(m)
    assert [r.code for r in la.recommendations] == ["LEVERAGE_NEGATIVE", "DCR_BELOW_MINIMUM", "BER_HIGH"]
    assert la.recommendations[0].text.startswith("ネガティブ・レバレッジ")

    la_en = analyze_leverage(m, language="en")
    assert la_en.recommendations[0].text.startswith("Negative leverage")


def test_excellent_dcr_recommendation():
    la = analyze_leverage(MetricRecord(yield_rate=7.0, loan_constant=6.2, debt_coverage_ratio=1.6))
    assert [r.code for r in la.recommendations] == ["LEVERAGE_LIMITED", "DCR_EXCELLENT"]


def test_component_analyses():
    m = MetricRecord(
        yield_rate=6.5,
        loan_constant=4.8,
        cash_on_cash_return=9.2,
        debt_coverage_ratio=1.45,
        break_even_ratio=72.5,
        interest_rate=1.8,
        loan_term=25,
        market_cap_rate=5.0,
        before_tax_cash_flow=1_000_000,
        after_tax_cash_flow=800_000,
    )
    la = analyze_leverage(m)

    fcr = la.yield_rate_analysis
    assert fcr.grade == "B"
    assert fcr.market_position == "above_market"
    assert fcr.risk == "low"

    k = la.loan_constant_analysis
    assert k.amortization_effect == pytest.approx(3.0)
    assert k.amortization_spread == "high_amortization"
    assert k.refinancing_risk == "low"

    ccr = la.cash_on_cash_analysis
    assert ccr.leverage_contribution == pytest.approx(2.7)
    assert ccr.sustainability == "high"
    assert ccr.tax_efficiency == "moderate"


def test_component_analyses_without_context():
    la = analyze_leverage(MetricRecord(loan_constant=5.0))
    assert la.yield_rate_analysis is None
    assert la.cash_on_cash_analysis is None
    assert la.loan_constant_analysis.amortization_spread == "unknown"
    assert la.loan_constant_analysis.refinancing_risk == "unknown"
    assert la.loan_constant_analysis.amortization_effect == pytest.approx(5.0)


_RATES = st.floats(min_value=-20.0, max_value=30.0, allow_nan=False)


@given(fcr=_RATES, k=_RATES)
def test_bucket_uses_the_same_gap_as_reported(fcr, k):
    m = MetricRecord(yield_rate=fcr, loan_constant=k)
    la = analyze_leverage(m)
    assert la.yield_gap == yield_gap(m) == fcr - k
    leverage_type, strength, grade, risk = classify_yield_gap(fcr - k)
    assert (la.leverage_type, la.leverage_strength, la.leverage_grade, la.leverage_risk) == (
        leverage_type,
        strength,
        grade,
        risk,
    )


def test_cash_on_cash_sustainability_reads_injected_bands():
    m = MetricRecord(cash_on_cash_return=9.0, debt_coverage_ratio=1.40, break_even_ratio=78.0)
    assert analyze_cash_on_cash(m).sustainability == "high"

    stricter = CcimFramework(
        dcr_standards=DcrStandards(good=1.50, acceptable=1.45),
        ber_standards=BerStandards(good=70.0, acceptable=75.0),
    )
    assert analyze_cash_on_cash(m, stricter).sustainability == "low"
