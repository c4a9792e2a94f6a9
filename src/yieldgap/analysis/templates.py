# src/yieldgap/analysis/templates.py
from __future__ import annotations

from typing import Dict

LANGUAGES: tuple[str, ...] = ("ja", "en")

# Recommendation texts keyed by code.
RECOMMENDATIONS: Dict[str, Dict[str, str]] = {
    "ja": {
        "LEVERAGE_EXCELLENT": "優良なレバレッジ効果により投資実行を強く推奨します。現在の融資条件を維持してください。",
        "LEVERAGE_GOOD": "良好なレバレッジ効果が確認されます。投資実行を推奨します。",
        "LEVERAGE_LIMITED": "限定的なレバレッジ効果です。融資条件の改善を検討してください。",
        "LEVERAGE_NEGATIVE": "ネガティブ・レバレッジが発生しています。融資条件の見直しまたは自己資金比率の増加を強く推奨します。",
        "DCR_BELOW_MINIMUM": "DCRが金融機関基準を下回っています。キャッシュフロー改善策が必要です。",
        "DCR_EXCELLENT": "DCRは優良水準です。安定したキャッシュフローが期待できます。",
        "BER_HIGH": "損益分岐点が高く、空室リスクに注意が必要です。",
    },
    "en": {
        "LEVERAGE_EXCELLENT": "Excellent positive leverage; proceeding with the investment is strongly recommended. Keep the current financing terms.",
        "LEVERAGE_GOOD": "Good positive leverage is confirmed; proceeding with the investment is recommended.",
        "LEVERAGE_LIMITED": "Leverage benefit is limited; consider negotiating better financing terms.",
        "LEVERAGE_NEGATIVE": "Negative leverage is present; revisiting the financing terms or raising the equity share is strongly recommended.",
        "DCR_BELOW_MINIMUM": "DCR is below the lender minimum; cash flow needs to improve.",
        "DCR_EXCELLENT": "DCR is at an excellent level; stable cash flow can be expected.",
        "BER_HIGH": "Break-even occupancy is high; watch vacancy risk closely.",
    },
}

# Risk factor texts keyed by code; {placeholders} are filled with .format().
RISK_FACTORS: Dict[str, Dict[str, str]] = {
    "ja": {
        "NEGATIVE_LEVERAGE": "ネガティブ・レバレッジ（イールドギャップ {yield_gap:.2f}%）",
        "LTV_VERY_HIGH": "LTVが80%を超過（{ltv:.0%}）",
        "LTV_HIGH": "LTVが70%を超過（{ltv:.0%}）",
        "BELOW_MARKET_YIELD": "FCRが市場キャップレートを下回る（{yield_rate:.2f}% < {market_cap_rate:.2f}%）",
        "MARKET_VACANCY_HIGH": "市場空室率が高水準（{vacancy:.1f}%）",
        "MARKET_VACANCY_ELEVATED": "市場空室率がやや高い（{vacancy:.1f}%）",
        "EXIT_CAP_EXPANSION": "出口キャップレートの上昇を想定（+{spread:.2f}%）",
        "OPEX_ABOVE_RANGE": "運営費率が標準レンジを超過（{ratio:.1f}%）",
        "OPEX_BELOW_RANGE": "運営費率が標準レンジを下回る（{ratio:.1f}%、過小計上の可能性）",
        "BER_DANGEROUS": "損益分岐入居率が危険水準（{ber:.1f}%）",
        "BER_RISKY": "損益分岐入居率が要注意水準（{ber:.1f}%）",
        "AGING_BUILDING": "築年数に伴う修繕積立の負担（築{age}年）",
        "MANAGEMENT_FEE_HIGH": "管理費が標準を上回る（{fee:.1f}%）",
        "DCR_BELOW_RISKY": "DCRが危険水準（{dcr:.2f}倍）",
        "DCR_BELOW_MINIMUM": "DCRが金融機関基準を下回る（{dcr:.2f}倍）",
        "DCR_BELOW_ACCEPTABLE": "DCRが許容水準未満（{dcr:.2f}倍）",
        "REFINANCING_SHORT_TERM": "融資期間が短くリファイナンスリスクが高い（{term:.0f}年）",
        "REFINANCING_MEDIUM_TERM": "融資期間が中程度でリファイナンスリスクあり（{term:.0f}年）",
    },
    "en": {
        "NEGATIVE_LEVERAGE": "Negative leverage (yield gap {yield_gap:.2f}%)",
        "LTV_VERY_HIGH": "LTV above 80% ({ltv:.0%})",
        "LTV_HIGH": "LTV above 70% ({ltv:.0%})",
        "BELOW_MARKET_YIELD": "FCR below market cap rate ({yield_rate:.2f}% < {market_cap_rate:.2f}%)",
        "MARKET_VACANCY_HIGH": "High market vacancy ({vacancy:.1f}%)",
        "MARKET_VACANCY_ELEVATED": "Elevated market vacancy ({vacancy:.1f}%)",
        "EXIT_CAP_EXPANSION": "Exit cap rate expansion assumed (+{spread:.2f}%)",
        "OPEX_ABOVE_RANGE": "Operating expense ratio above the typical range ({ratio:.1f}%)",
        "OPEX_BELOW_RANGE": "Operating expense ratio below the typical range ({ratio:.1f}%, possibly understated)",
        "BER_DANGEROUS": "Break-even occupancy at a dangerous level ({ber:.1f}%)",
        "BER_RISKY": "Break-even occupancy needs attention ({ber:.1f}%)",
        "AGING_BUILDING": "Capital reserve burden from building age ({age} years)",
        "MANAGEMENT_FEE_HIGH": "Management fee above typical ({fee:.1f}%)",
        "DCR_BELOW_RISKY": "DCR at a dangerous level ({dcr:.2f}x)",
        "DCR_BELOW_MINIMUM": "DCR below lender minimum ({dcr:.2f}x)",
        "DCR_BELOW_ACCEPTABLE": "DCR below acceptable level ({dcr:.2f}x)",
        "REFINANCING_SHORT_TERM": "Short loan term, high refinancing risk ({term:.0f} years)",
        "REFINANCING_MEDIUM_TERM": "Medium loan term, some refinancing risk ({term:.0f} years)",
    },
}

STRENGTH_LABELS: Dict[str, Dict[str, str]] = {
    "ja": {"excellent": "優良", "good": "良好", "moderate": "中程度", "weak": "限定的", "negative": "ネガティブ"},
    "en": {"excellent": "excellent", "good": "good", "moderate": "moderate", "weak": "weak", "negative": "negative"},
}

SUMMARY_TEXT: Dict[str, Dict[str, str]] = {
    "ja": {
        "executive": "投資分析結果: {recommendation} (投資グレード: {grade})",
        "reasoning": "包括的な分析に基づく推奨（データ完全性 {completeness}%、リスクグレード {risk_grade}）",
        "opinion": "CPM/CCIM基準による専門的な投資分析を実施しました。",
        "opinion_leverage": "レバレッジ評価: {strength}（グレード {grade}）、安定性スコア {score}/100。",
        "opinion_no_leverage": "FCRまたはK%が不明のため、レバレッジ効果は判定できません。",
    },
    "en": {
        "executive": "Investment analysis result: {recommendation} (investment grade: {grade})",
        "reasoning": "Recommendation based on the full analysis (data completeness {completeness}%, risk grade {risk_grade})",
        "opinion": "Professional investment analysis performed to CPM/CCIM standards.",
        "opinion_leverage": "Leverage: {strength} (grade {grade}), stability score {score}/100.",
        "opinion_no_leverage": "Leverage cannot be judged because FCR or K% is missing.",
    },
}


def recommendation_text(code: str, language: str = "ja") -> str:
    return RECOMMENDATIONS[language][code]


def risk_factor_text(code: str, language: str = "ja", **values) -> str:
    return RISK_FACTORS[language][code].format(**values)


def summary_text(key: str, language: str = "ja", **values) -> str:
    return SUMMARY_TEXT[language][key].format(**values)
