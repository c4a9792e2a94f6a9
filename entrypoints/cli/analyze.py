from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from yieldgap.adapters.config import config
from yieldgap.analysis.summary import render_report
from yieldgap.domain.standards import DEFAULT_STANDARDS
from yieldgap.services.engine import analyze_text

app = typer.Typer(help="yieldgap: CPM/CCIM leverage analysis for listing and memo text.")


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise typer.BadParameter(f"{path} is not UTF-8 text") from e


@app.command("analyze")
def analyze_cmd(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Listing / memo text file"),
    aux: Optional[Path] = typer.Option(
        None,
        "--aux",
        exists=True,
        dir_okay=False,
        help="Text already extracted from an attachment (PDF, spreadsheet, ...)",
    ),
    language: str = typer.Option(config.REPORT_LANGUAGE, "--language", "-l", help="Report language: ja or en"),
    as_json: bool = typer.Option(False, "--json", help="Print the full analysis result as JSON"),
) -> None:
    """
    Analyze one document and print the markdown report (or the JSON result).
    """
    text = _read_text(source)
    aux_text = _read_text(aux) if aux is not None else None

    try:
        result = analyze_text(text, aux_text, standards=DEFAULT_STANDARDS, settings=config, language=language)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    if as_json:
        typer.echo(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
    else:
        typer.echo(render_report(result, language), nl=False)


@app.command("standards")
def standards_cmd() -> None:
    """
    Print the CPM/CCIM threshold tables in use.
    """
    typer.echo(json.dumps(DEFAULT_STANDARDS.model_dump(mode="json"), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    app()
