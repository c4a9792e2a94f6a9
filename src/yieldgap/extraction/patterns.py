# src/yieldgap/extraction/patterns.py
"""
Pattern library: bilingual (Japanese / English) recognisers per metric.

Every field maps to an ordered tuple of FieldPattern. The extractor tries
them in order and the first one that yields a finite number wins.

Label alternations use look-behinds where one label is a suffix of
another concept's label (e.g. "Market Cap Rate" vs "Cap Rate").
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Literal

ValueKind = Literal["percent", "ratio", "currency", "years"]
AttributeKind = Literal["text", "int", "float"]

_FLAGS = re.IGNORECASE | re.MULTILINE

# label / value separator: "FCR: 8%", "FCR：8%", "FCR = 8%", "FCR 8%"
_SEP = r"[:：=\s]*"

_SIGNED = r"([-−▲△]?[0-9]+(?:\.[0-9]+)?)"

_VALUE_REGEX: dict[str, str] = {
    "percent": _SIGNED + r"\s*[%％]",
    "ratio": r"([0-9]+(?:\.[0-9]+)?)\s*(?:倍|x|times)?",
    "years": r"([0-9]+(?:\.[0-9]+)?)\s*(?:年|years?|yrs?)",
    "currency": (
        # a trailing % means this is a ratio, not an amount
        r"[¥￥]?\s*(?P<amount>[-−▲△]?[0-9][0-9,]*(?:\.[0-9]+)?)(?![0-9,.]*\s*[%％])\s*"
        # compound "3億5,000万円": the minor part carries its own unit
        r"(?:億[ \t]*(?P<minor>[0-9][0-9,]*(?:\.[0-9]+)?)[ \t]*(?P<minor_unit>千万|百万|万)円?"
        r"|(?P<unit>千万円|千万|億円|億|百万円|百万|千円|万円|万|円|(?:million|mil|mm|yen|jpy)(?![a-z])))?"
    ),
}


def _w(acronym: str) -> str:
    # ASCII word boundary; \b would treat adjacent kana/kanji as word chars
    return r"(?<![A-Za-z])" + acronym + r"(?![A-Za-z])"


@dataclass(frozen=True)
class FieldPattern:
    """One recogniser: compiled regex, how to read the capture, optional transform."""
    regex: re.Pattern[str]
    kind: ValueKind
    transform: Callable[[float], float] | None = None


@dataclass(frozen=True)
class AttributePattern:
    regex: re.Pattern[str]
    kind: AttributeKind = "text"


def _p(labels: str, kind: ValueKind, transform: Callable[[float], float] | None = None) -> FieldPattern:
    regex = re.compile(r"(?:" + labels + r")" + _SEP + _VALUE_REGEX[kind], _FLAGS)
    return FieldPattern(regex=regex, kind=kind, transform=transform)


def _occupancy_to_vacancy(v: float) -> float:
    return 100.0 - v


def _percent_to_fraction(v: float) -> float:
    return v / 100.0


# ---------------------------------------------------------------------
# Metric patterns, keyed by MetricRecord field name
# ---------------------------------------------------------------------

METRIC_PATTERNS: dict[str, tuple[FieldPattern, ...]] = {
    # Core CCIM metrics
    "yield_rate": (
        _p(
            _w("FCR") + r"|総収益率|Full Cash Return"
            r"|(?<!市場)(?<!出口)(?<!売却時)(?<!ターミナル)キャップレート"
            r"|(?<!Market )(?<!Exit )(?<!Terminal )(?<!Reversion )Cap Rate",
            "percent",
        ),
        _p(_w("NOI") + r"\s*利回り|物件収益率|基本収益率|ネット利回り", "percent"),
    ),
    "loan_constant": (
        _p(r"(?<![A-Za-z])K[%％]|ローン定数|Loan Constant|借入定数", "percent"),
        _p(r"年間返済率|元利返済率", "percent"),
    ),
    "cash_on_cash_return": (
        _p(_w("CCR") + r"|自己資金配当率|Cash[- ]on[- ]Cash(?: Return)?|エクイティ配当率", "percent"),
        _p(r"自己資金利回り|投資収益率|" + _w("CoC"), "percent"),
    ),
    "debt_coverage_ratio": (
        _p(_w("DCR") + r"|債務償還比率|Debt Coverage Ratio|借入金償還余裕率", "ratio"),
        _p(_w("DSCR") + r"|Debt Service Coverage(?: Ratio)?|デットサービスカバレッジレシオ", "ratio"),
    ),
    "break_even_ratio": (
        _p(_w("BER") + r"|損益分岐点|Break[- ]?Even Ratio|損益分岐入居率", "percent"),
        _p(r"ブレークイーブン|収支均衡点", "percent"),
    ),

    # IRR
    "levered_irr": (
        _p(
            r"(?<!un)(?<!after-tax )(?<!after tax )Levered IRR"
            r"|(?<!税引後)(?<!税引後 )(?<!アン)(?:融資利用時IRR|レバレッジIRR)",
            "percent",
        ),
        _p(r"借入時IRR|融資時内部収益率", "percent"),
        # a bare "IRR:" line is read as the equity (levered) IRR
        _p(r"^\s*(?:IRR|内部収益率|Internal Rate of Return)", "percent"),
    ),
    "unlevered_irr": (
        _p(
            r"(?<!after-tax )(?<!after tax )Unlevered IRR"
            r"|(?<!税引後)(?<!税引後 )(?:全額自己資金時IRR|アンレバレッジIRR)",
            "percent",
        ),
        _p(r"自己資金IRR|無借入IRR", "percent"),
    ),
    "levered_irr_after_tax": (
        _p(r"税引後\s*(?:Levered IRR|融資利用時IRR|レバレッジIRR)|After[- ]Tax Levered IRR", "percent"),
    ),
    "unlevered_irr_after_tax": (
        _p(r"税引後\s*(?:Unlevered IRR|全額自己資金時IRR|アンレバレッジIRR)|After[- ]Tax Unlevered IRR", "percent"),
    ),

    # Financial structure
    "price": (
        _p(r"物件価格|Property Price|(?:Purchase|Acquisition|Asking) Price|取得価格|購入価格", "currency"),
        _p(r"売買価格|販売価格|(?<!総)投資額", "currency"),
    ),
    "total_investment": (
        _p(r"総投資額|Total Investment|総投資費用|総事業費", "currency"),
    ),
    "loan_amount": (
        _p(r"借入金額|Loan Amount|融資額|借入額|ローン金額", "currency"),
    ),
    "equity": (
        _p(r"自己資金|Equity(?! Multiple)|頭金|出資額", "currency"),
    ),
    "ltv": (
        _p(_w("LTV") + r"|Loan[- ]to[- ]Value|借入比率|融資比率", "percent", _percent_to_fraction),
    ),

    # Income statement
    "gross_potential_income": (
        _p(r"総潜在収入|" + _w("GPI") + r"|Gross Potential Income|満室想定収入|満室時収入", "currency"),
        _p(r"(?<!実効)総収入|(?<!Effective )Gross Income", "currency"),
    ),
    "effective_gross_income": (
        _p(r"実効総収入|" + _w("EGI") + r"|Effective Gross Income|実効収入", "currency"),
    ),
    "net_operating_income": (
        _p(r"純営業収益|" + _w("NOI") + r"|Net Operating Income|営業純利益", "currency"),
        _p(r"純収入|ネット収入|Net Income", "currency"),
    ),
    "before_tax_cash_flow": (
        _p(r"税引前キャッシュフロー|" + _w("BTCF") + r"|Before[- ]Tax Cash Flow", "currency"),
        _p(r"税引前CF|税前CF", "currency"),
    ),
    "after_tax_cash_flow": (
        _p(r"税引後キャッシュフロー|" + _w("ATCF") + r"|After[- ]Tax Cash Flow", "currency"),
        _p(r"税引後CF|税後CF", "currency"),
    ),

    # Operating expenses
    "operating_expenses": (
        _p(r"運営費|Operating Expenses|" + _w("OpEx") + r"|営業費用", "currency"),
        _p(r"管理運営費|運営コスト|諸経費", "currency"),
    ),
    "operating_expense_ratio": (
        _p(r"運営費率|経費率|" + _w("OER") + r"|Operating Expense Ratio|OpEx Ratio", "percent"),
    ),
    "management_fee": (
        _p(r"管理費|Management Fee|PM費用|PMフィー", "currency"),
    ),
    "maintenance_reserve": (
        _p(r"修繕積立金|修繕費|Maintenance Reserve", "currency"),
    ),
    "capex_reserve": (
        _p(r"資本的支出積立金|大規模修繕積立金?|CapEx Reserve|Capital Reserve", "currency"),
    ),

    # Loan terms
    "interest_rate": (
        _p(r"借入金利|ローン金利|Interest Rate|金利", "percent"),
    ),
    "loan_term": (
        _p(r"借入期間|Loan Term|融資期間", "years"),
    ),
    "amortization_period": (
        _p(r"償却期間|返済期間|Amortization(?: Period)?", "years"),
    ),
    "annual_debt_service": (
        _p(r"年間元利返済額|" + _w("ADS") + r"|Annual Debt Service|年間返済額", "currency"),
    ),

    # Market
    "market_cap_rate": (
        _p(r"市場キャップレート|Market Cap Rate|周辺相場", "percent"),
    ),
    "market_rent_growth": (
        _p(r"賃料成長率|賃料上昇率|(?:Market )?Rent Growth", "percent"),
    ),
    "vacancy_rate": (
        _p(r"(?<!市場)(?<!エリア)空室率|(?<!Market )Vacancy Rate", "percent"),
        _p(
            r"(?<!分岐)(?:稼働率|入居率)|(?<!even )(?<!even-)Occupancy(?: Rate)?",
            "percent",
            _occupancy_to_vacancy,
        ),
    ),
    "market_vacancy_rate": (
        _p(r"市場空室率|Market Vacancy(?: Rate)?|エリア空室率", "percent"),
    ),

    # Exit
    "holding_period": (
        _p(r"保有期間|Holding Period|投資期間", "years"),
    ),
    "exit_cap_rate": (
        _p(r"出口キャップレート|Exit Cap(?: Rate)?|売却時キャップレート", "percent"),
        _p(r"ターミナルキャップレート|Terminal Cap Rate|Reversion Cap Rate", "percent"),
    ),
    "terminal_value": (
        _p(r"ターミナルバリュー|Terminal Value|売却想定価格|Reversion Value", "currency"),
    ),

    # NPV
    "npv": (
        _p(_w("NPV") + r"|正味現在価値|Net Present Value", "currency"),
        _p(r"純現在価値|ネット現在価値", "currency"),
    ),
    "discount_rate": (
        _p(r"割引率|Discount Rate|要求収益率", "percent"),
        _p(_w("WACC") + r"|加重平均資本コスト", "percent"),
    ),

    # Tax
    "depreciation": (
        _p(r"減価償却費|Depreciation", "currency"),
    ),
    "tax_rate": (
        _p(r"実効税率|税率|Tax Rate", "percent"),
    ),
}


# ---------------------------------------------------------------------
# Property attributes
# ---------------------------------------------------------------------

def _text(labels: str) -> AttributePattern:
    # free text needs an explicit separator so "渋谷駅から" is not a station line
    return AttributePattern(re.compile(r"(?:" + labels + r")\s*[:：]\s*([^\n\r]+)", _FLAGS), "text")


def _int(regex: str) -> AttributePattern:
    return AttributePattern(re.compile(regex, _FLAGS), "int")


def _area(labels: str) -> AttributePattern:
    return AttributePattern(
        re.compile(r"(?:" + labels + r")" + _SEP + r"([0-9][0-9,]*(?:\.[0-9]+)?)\s*(?:㎡|m2|m²|平米|sqm)", _FLAGS),
        "float",
    )


ATTRIBUTE_PATTERNS: dict[str, tuple[AttributePattern, ...]] = {
    "name": (_text(r"物件名|Property Name|名称"),),
    "address": (_text(r"所在地|Address|住所|Location"),),
    "nearest_station": (_text(r"最寄り駅|最寄駅|Nearest Station|(?<![a-z])Station|駅"),),
    "walking_minutes": (
        _int(r"(?:徒歩|Walk|歩)[:：\s]*([0-9]+)\s*分"),
        _int(r"([0-9]+)\s*min(?:ute)?s?\.?\s*walk"),
        _int(r"walk[:：\s]*([0-9]+)\s*min"),
    ),
    "structure": (_text(r"構造|Structure"),),
    "age": (
        _int(r"(?:築年数|Building Age|(?<![A-Za-z])Age|(?<![建構改新])築)[:：\s]*([0-9]+)"),
        _int(r"([0-9]+)\s*years?\s*old"),
    ),
    "total_units": (
        _int(r"(?:総戸数|Total Units|戸数|(?<![A-Za-z])Units)[:：\s]*([0-9]+)"),
        _int(r"([0-9]+)\s*戸"),
    ),
    "total_area": (_area(r"延床面積|Total Floor Area|Total Area|総面積"),),
    "building_area": (_area(r"建物面積|建築面積|Building Area"),),
    "land_area": (_area(r"土地面積|Land Area|敷地面積"),),
    "condition": (_text(r"建物状態|管理状態|Building Condition|Condition"),),
}

# Strip a trailing walking-time phrase from the station line
STATION_TAIL = re.compile(r"\s*(?:[（(]?\s*徒歩.*|[,、]?\s*[0-9]+\s*min(?:ute)?s?\.?\s*walk.*|[,、]?\s*(?<![A-Za-z])walk.*)$", _FLAGS)


# ---------------------------------------------------------------------
# Category inference: first group with any keyword present wins
# ---------------------------------------------------------------------

CATEGORY_KEYWORDS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("multifamily", re.compile(
        r"マンション|アパート|集合住宅|賃貸住宅|(?<![A-Za-z])(?:multi-?family|apartments?|residential)(?![A-Za-z])", _FLAGS)),
    ("office", re.compile(r"オフィス|事務所|ビル|(?<![A-Za-z])offices?(?![A-Za-z])", _FLAGS)),
    ("retail", re.compile(r"店舗|商業|リテール|小売|(?<![A-Za-z])(?:retail|shopping)(?![A-Za-z])", _FLAGS)),
    ("industrial", re.compile(r"倉庫|工場|物流|産業|(?<![A-Za-z])(?:industrial|warehouse|logistics)(?![A-Za-z])", _FLAGS)),
)
