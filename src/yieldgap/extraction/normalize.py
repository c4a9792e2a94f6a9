# src/yieldgap/extraction/normalize.py
from __future__ import annotations

import math
from dataclasses import dataclass

from yieldgap.adapters.config import AppConfig

# Explicit unit suffixes -> multiplier into base currency units (yen)
UNIT_MULTIPLIERS: dict[str, float] = {
    "億円": 100_000_000.0,
    "億": 100_000_000.0,
    "千万円": 10_000_000.0,
    "千万": 10_000_000.0,
    "百万円": 1_000_000.0,
    "百万": 1_000_000.0,
    "million": 1_000_000.0,
    "mil": 1_000_000.0,
    "mm": 1_000_000.0,
    "千円": 1_000.0,
    "万円": 10_000.0,
    "万": 10_000.0,
    "円": 1.0,
    "yen": 1.0,
    "jpy": 1.0,
}

# Leading markers that mean "negative" in Japanese financial statements
_NEGATIVE_MARKERS = ("-", "−", "▲", "△")


@dataclass(frozen=True)
class CurrencyScale:
    """
    How to read a bare currency amount that carries no unit suffix.

    heuristic=False keeps bare amounts exactly as written.
    """
    heuristic: bool = True
    millions_below: float = 1_000.0
    thousands_below: float = 1_000_000.0

    @classmethod
    def from_config(cls, cfg: AppConfig) -> "CurrencyScale":
        return cls(
            heuristic=cfg.CURRENCY_SCALE_HEURISTIC,
            millions_below=cfg.CURRENCY_MILLIONS_BELOW,
            thousands_below=cfg.CURRENCY_THOUSANDS_BELOW,
        )


DEFAULT_SCALE = CurrencyScale()


def parse_number(raw: str | None) -> float | None:
    """
    Parse captures like "8.5", "1,234.5", "▲3,000".
    Returns None for anything that is not a finite number after stripping
    thousands separators and currency glyphs.
    """
    if raw is None:
        return None
    s = raw.strip()
    for glyph in ("¥", "￥", ",", "，", " "):
        s = s.replace(glyph, "")
    negative = False
    if s.startswith(_NEGATIVE_MARKERS):
        negative = True
        s = s[1:]
    if not s:
        return None
    try:
        value = float(s)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return -value if negative else value


def normalize_currency(
    raw: str | None,
    unit: str | None = None,
    scale: CurrencyScale = DEFAULT_SCALE,
) -> float | None:
    """
    Express a captured amount in base currency units.

    An explicit unit wins. Otherwise the bare-amount heuristic applies:
    "50" -> 50,000,000 (millions), "50,000" -> 50,000,000 (thousands),
    "75,000,000" -> unchanged.

    The thousands band reads memos that quote amounts in 千円 without the
    suffix. A genuinely small bare amount such as a 600,000 yen fee is
    therefore read as 600,000,000; state the unit, or raise or disable the
    band via CurrencyScale, when such figures are expected.
    """
    value = parse_number(raw)
    if value is None:
        return None

    if unit:
        mult = UNIT_MULTIPLIERS.get(unit.strip().lower())
        if mult is not None:
            return value * mult

    if not scale.heuristic:
        return value

    magnitude = abs(value)
    if magnitude < scale.millions_below:
        return value * 1_000_000.0
    if magnitude < scale.thousands_below:
        return value * 1_000.0
    return value


def normalize_compound_amount(
    major: str | None,
    minor: str | None,
    minor_unit: str | None,
) -> float | None:
    """
    Japanese compound amounts: "3億5,000万" -> 350,000,000, "1億2千万" -> 120,000,000.
    `major` counts 億; `minor` is read in `minor_unit` (千万, 百万 or 万).
    A leading negative marker applies to the whole amount.
    """
    high = parse_number(major)
    low = parse_number(minor)
    mult = UNIT_MULTIPLIERS.get((minor_unit or "").strip())
    if high is None or low is None or mult is None:
        return None
    total = abs(high) * UNIT_MULTIPLIERS["億"] + abs(low) * mult
    return -total if high < 0 else total
