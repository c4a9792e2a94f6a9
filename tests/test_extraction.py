# tests/test_extraction.py
import math

import pytest
from hypothesis import given, strategies as st

from fixtures.listings import EN_NEGATIVE_LEVERAGE, JP_FULL_LISTING, JP_RAW_FINANCIALS
from yieldgap.domain.metrics import METRIC_FIELDS
from yieldgap.extraction.extractor import (
    extract,
    extract_metrics,
    extract_property_attributes,
    infer_category,
)


def test_japanese_memo_core_metrics():
    m = extract_metrics(JP_FULL_LISTING)

    assert m.yield_rate == pytest.approx(6.5)
    assert m.loan_constant == pytest.approx(4.8)
    assert m.cash_on_cash_return == pytest.approx(9.2)
    assert m.debt_coverage_ratio == pytest.approx(1.45)
    assert m.break_even_ratio == pytest.approx(72.5)

    assert m.price == pytest.approx(300_000_000.0)
    assert m.loan_amount == pytest.approx(240_000_000.0)
    assert m.equity == pytest.approx(60_000_000.0)
    assert m.npv == pytest.approx(12_500_000.0)

    assert m.interest_rate == pytest.approx(1.8)
    assert m.loan_term == pytest.approx(25.0)
    assert m.discount_rate == pytest.approx(5.0)


def test_levered_and_unlevered_irr_are_not_confused():
    m = extract_metrics(JP_FULL_LISTING)
    assert m.levered_irr == pytest.approx(9.5)
    assert m.unlevered_irr == pytest.approx(6.8)

    # order in the text must not matter
    swapped = "アンレバレッジIRR：6.8%\nレバレッジIRR：9.5%\n"
    m2 = extract_metrics(swapped)
    assert m2.levered_irr == pytest.approx(9.5)
    assert m2.unlevered_irr == pytest.approx(6.8)


def test_english_memo_separates_market_and_exit_cap_rates():
    m = extract_metrics(EN_NEGATIVE_LEVERAGE)

    assert m.yield_rate == pytest.approx(4.2)
    assert m.market_cap_rate == pytest.approx(4.5)
    assert m.exit_cap_rate == pytest.approx(5.0)
    assert m.market_vacancy_rate == pytest.approx(9.5)
    assert m.vacancy_rate is None

    assert m.price == pytest.approx(800_000_000.0)
    assert m.npv == pytest.approx(-15_000_000.0)


def test_missing_fields_stay_absent_not_zero():
    m = extract_metrics("FCR: 8.5%")
    assert m.yield_rate == pytest.approx(8.5)
    assert m.loan_constant is None
    assert m.price is None
    assert set(m.present()) == {"yield_rate"}


def test_malformed_capture_is_no_match():
    m = extract_metrics("FCR: abc%\nK%: 6.2%")
    assert m.yield_rate is None
    assert m.loan_constant == pytest.approx(6.2)


def test_currency_followed_by_percent_is_not_an_amount():
    # "30%" after an amount label is a ratio, not 30 million of equity
    m = extract_metrics("自己資金：30%\n物件価格：30%")
    assert m.equity is None
    assert m.price is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("物件価格：9千万円", 90_000_000.0),
        ("物件価格：3億5,000万円", 350_000_000.0),
        ("物件価格：1億2千万円", 120_000_000.0),
        ("物件価格：3億円", 300_000_000.0),
        ("物件価格：3億\n借入金額：2億円", 300_000_000.0),
    ],
)
def test_japanese_unit_amounts(text, expected):
    assert extract_metrics(text).price == pytest.approx(expected)


def test_compound_amount_keeps_following_fields_apart():
    m = extract_metrics("物件価格：3億5,000万円\n借入金額：2億8千万円\n自己資金：7,000万円")
    assert m.price == pytest.approx(350_000_000.0)
    assert m.loan_amount == pytest.approx(280_000_000.0)
    assert m.equity == pytest.approx(70_000_000.0)


def test_full_width_digits_are_read():
    m = extract_metrics("FCR：８．５％\nK%：６．２％\n物件価格：５０，０００，０００円")
    assert m.yield_rate == pytest.approx(8.5)
    assert m.loan_constant == pytest.approx(6.2)
    assert m.price == pytest.approx(50_000_000.0)


def test_full_width_walking_minutes():
    prop = extract_property_attributes("最寄り駅：武蔵小杉駅 徒歩７分")
    assert prop.walking_minutes == 7


def test_first_pattern_wins_over_text_position():
    # the FCR label outranks 物件収益率 even though it appears later
    assert extract_metrics("物件収益率：7%\nFCR：8%").yield_rate == pytest.approx(8.0)


def test_occupancy_is_converted_to_vacancy():
    m = extract_metrics("稼働率：95%")
    assert m.vacancy_rate == pytest.approx(5.0)


def test_break_even_occupancy_is_not_vacancy():
    m = extract_metrics("Break-even Occupancy: 80%")
    assert m.vacancy_rate is None


def test_ltv_is_stored_as_fraction():
    m = extract_metrics("LTV: 75%")
    assert m.ltv == pytest.approx(0.75)


def test_acronyms_need_word_boundaries():
    # "Number" contains "ber", "Mortgage" contains "age"
    m = extract_metrics("Number 12%")
    assert m.break_even_ratio is None
    prop = extract_property_attributes("Mortgage 30 years")
    assert prop.age is None


def test_auxiliary_text_is_scanned_after_primary():
    m = extract_metrics("FCR: 7.0%", "FCR: 9.0%\nK%: 5.0%")
    assert m.yield_rate == pytest.approx(7.0)
    assert m.loan_constant == pytest.approx(5.0)


def test_japanese_property_attributes():
    prop = extract_property_attributes(JP_FULL_LISTING)

    assert prop.name == "サンライズ川崎"
    assert prop.address == "神奈川県川崎市中原区小杉町1-1"
    assert prop.nearest_station == "武蔵小杉駅"
    assert prop.walking_minutes == 7
    assert prop.structure == "RC造"
    assert prop.age == 18
    assert prop.total_units == 30
    assert prop.total_area == pytest.approx(1850.25)
    assert prop.category == "multifamily"


def test_english_property_attributes():
    prop = extract_property_attributes(EN_NEGATIVE_LEVERAGE)

    assert prop.name == "Maple Court Apartments"
    assert prop.nearest_station == "Tamachi"
    assert prop.walking_minutes == 6
    assert prop.age == 30
    assert prop.total_units == 40
    assert prop.category == "multifamily"


@pytest.mark.parametrize(
    "text, category",
    [
        ("駅前のオフィスビル", "office"),
        ("路面店舗", "retail"),
        ("Logistics warehouse near the port", "industrial"),
        ("雑居", None),
        # first category group with a keyword wins
        ("オフィス付きマンション", "multifamily"),
    ],
)
def test_infer_category(text, category):
    assert infer_category(text) == category


def test_extract_returns_metrics_and_attributes():
    metrics, prop = extract(JP_RAW_FINANCIALS)
    assert metrics.net_operating_income == pytest.approx(26_200_000.0)
    assert metrics.annual_debt_service == pytest.approx(20_000_000.0)
    assert metrics.gross_potential_income == pytest.approx(36_000_000.0)
    assert metrics.effective_gross_income == pytest.approx(34_200_000.0)
    assert prop.age == 12


_LABELS = st.sampled_from(
    ["FCR", "K%", "CCR", "DCR", "BER", "NPV", "物件価格", "自己資金", "LTV", "稼働率", "Loan Amount"]
)
_VALUES = st.one_of(
    st.floats(allow_nan=True, allow_infinity=True).map(str),
    st.text(alphabet="0123456789,.-▲%％億万円", max_size=12),
    st.just("9" * 400),
)


@given(
    lines=st.lists(st.tuples(_LABELS, st.sampled_from([":", "：", " ", "="]), _VALUES), max_size=12),
    noise=st.text(max_size=80),
)
def test_every_extracted_field_is_finite_or_absent(lines, noise):
    text = noise + "\n" + "\n".join(f"{label}{sep}{value}" for label, sep, value in lines)
    m = extract_metrics(text)
    for name in METRIC_FIELDS:
        value = getattr(m, name)
        assert value is None or (isinstance(value, float) and math.isfinite(value))
