# tests/test_cli_analyze.py
import json

from typer.testing import CliRunner

from entrypoints.cli.analyze import app
from fixtures.listings import JP_FULL_LISTING

runner = CliRunner()


def test_cli_prints_markdown_report(tmp_path):
    source = tmp_path / "memo.txt"
    source.write_text(JP_FULL_LISTING, encoding="utf-8")

    result = runner.invoke(app, ["analyze", str(source)])
    assert result.exit_code == 0, result.output
    assert "# 1. Executive Summary（投資概要）" in result.output
    assert "**投資グレード**: A" in result.output


def test_cli_json_with_aux_file(tmp_path):
    source = tmp_path / "memo.txt"
    source.write_text("FCR: 8.5%\n", encoding="utf-8")
    aux = tmp_path / "attachment.txt"
    aux.write_text("K%: 6.2%\n", encoding="utf-8")

    result = runner.invoke(app, ["analyze", str(source), "--aux", str(aux), "--json", "--language", "en"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["leverage_analysis"]["leverage_grade"] == "A"
    assert data["leverage_analysis"]["recommendations"][0]["code"] == "LEVERAGE_EXCELLENT"


def test_cli_rejects_unknown_language(tmp_path):
    source = tmp_path / "memo.txt"
    source.write_text("FCR: 8.5%\n", encoding="utf-8")
    result = runner.invoke(app, ["analyze", str(source), "--language", "fr"])
    assert result.exit_code != 0


def test_cli_prints_standards():
    result = runner.invoke(app, ["standards"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["ccim"]["leverage_thresholds"][0] == ["excellent", 1.5]
