# tests/test_summary.py
import pytest

from fixtures.listings import EN_NEGATIVE_LEVERAGE, FCR_AND_K_ONLY, JP_FULL_LISTING
from yieldgap.analysis.summary import render_report
from yieldgap.services.engine import analyze_text


def test_professional_summary_block(fixed_now):
    result = analyze_text(JP_FULL_LISTING, now=fixed_now)
    summary = result.professional_summary

    assert summary.executive_summary == "投資分析結果: RECOMMENDED (投資グレード: A)"
    assert summary.key_metrics.yield_gap == result.leverage_analysis.yield_gap
    assert summary.key_metrics.debt_coverage_ratio == 1.45
    assert summary.investment_recommendation.confidence == result.quality.confidence
    assert "データ完全性 82%" in summary.investment_recommendation.reasoning
    assert summary.professional_opinion.startswith("CPM/CCIM基準による専門的な投資分析を実施しました。")
    # LTV 80% is the only risk factor
    assert summary.risk_factors == ("LTVが70%を超過（80%）",)


def test_report_is_idempotent(fixed_now):
    result = analyze_text(JP_FULL_LISTING, now=fixed_now)
    assert render_report(result) == render_report(result)
    assert render_report(result, "en") == render_report(result, "en")


def test_japanese_report_sections(fixed_now):
    report = render_report(analyze_text(JP_FULL_LISTING, now=fixed_now))

    assert report.startswith("# 1. Executive Summary（投資概要）\n")
    assert "**物件所在地**: 神奈川県川崎市中原区小杉町1-1" in report
    assert "**最寄り駅**: 武蔵小杉駅 徒歩7分" in report
    assert "## レバレッジ効果判定（CPM/CCIM基準）" in report
    assert "**FCR（総収益率）**: 6.50%" in report
    assert "**K%（ローン定数）**: 4.80%" in report
    assert "**CCR（自己資金配当率）**: 9.20%" in report
    assert "**イールドギャップ（FCR - K%）**: 1.70%" in report
    assert "ポジティブ・レバレッジ（正のレバレッジ）" in report
    assert "**DCR（借入金償還余裕率）**: 1.45倍 （金融機関基準をクリア）" in report
    assert "**BER（損益分岐入居率）**: 72.5% （優良水準）" in report
    assert "**投資推奨度**: RECOMMENDED" in report
    assert "**投資グレード**: A" in report
    assert "## 専門家推奨事項\n\n1. 優良なレバレッジ効果により投資実行を強く推奨します。" in report


def test_english_report_for_negative_leverage():
    report = render_report(analyze_text(EN_NEGATIVE_LEVERAGE, language="en"), "en")

    assert report.startswith("# 1. Executive Summary\n")
    assert "**Nearest station**: Tamachi, 6 min walk" in report
    assert "**Leverage type**: negative leverage" in report
    assert "**DCR (debt coverage ratio)**: 1.15x (below lender standard)" in report
    assert "**BER (break-even occupancy)**: 92.0% (needs attention)" in report
    assert "**Investment grade**: C" in report
    assert "1. Negative leverage is present" in report
    assert "3. Break-even occupancy is high" in report


def test_report_language_is_independent_of_analysis_language():
    result = analyze_text(EN_NEGATIVE_LEVERAGE, language="en")
    report = render_report(result, "ja")
    assert "1. ネガティブ・レバレッジが発生しています。" in report


def test_sparse_report_omits_missing_lines():
    report = render_report(analyze_text(FCR_AND_K_ONLY))
    assert "物件所在地" not in report
    assert "DCR" not in report
    assert "CCR" not in report
    assert "**イールドギャップ（FCR - K%）**: 2.30%" in report
    assert "**投資推奨度**: NOT_RECOMMENDED" in report


def test_report_rejects_unsupported_language(fixed_now):
    result = analyze_text(FCR_AND_K_ONLY, now=fixed_now)
    with pytest.raises(ValueError, match="Unsupported report language"):
        render_report(result, "fr")
