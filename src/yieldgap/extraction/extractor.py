# src/yieldgap/extraction/extractor.py
from __future__ import annotations

import math
import re
import unicodedata
from typing import Any, Mapping, Sequence

from yieldgap.adapters.logging_utils import get_logger
from yieldgap.domain.metrics import MetricRecord, PropertyAttributes
from yieldgap.extraction.normalize import (
    DEFAULT_SCALE,
    CurrencyScale,
    normalize_compound_amount,
    normalize_currency,
    parse_number,
)
from yieldgap.extraction.patterns import (
    ATTRIBUTE_PATTERNS,
    CATEGORY_KEYWORDS,
    METRIC_PATTERNS,
    STATION_TAIL,
    AttributePattern,
    FieldPattern,
)

logger = get_logger(__name__)


def combine_sources(text: str, auxiliary_text: str | None = None) -> str:
    """
    Primary text first, then file-derived text.
    Both are scanned the same way; on ties the primary text wins.

    The result is NFKC-normalised so full-width digits, colons and percent
    signs ("ＦＣＲ：８．５％") read like their ASCII forms.
    """
    if auxiliary_text:
        text = f"{text}\n{auxiliary_text}"
    return unicodedata.normalize("NFKC", text)


def _read_match(pattern: FieldPattern, match: re.Match[str], scale: CurrencyScale) -> float | None:
    if pattern.kind == "currency":
        if match.group("minor") is not None:
            value = normalize_compound_amount(match.group("amount"), match.group("minor"), match.group("minor_unit"))
        else:
            value = normalize_currency(match.group("amount"), match.group("unit"), scale)
    else:
        value = parse_number(match.group(1))

    if value is None:
        return None
    if pattern.transform is not None:
        value = pattern.transform(value)
    return value if math.isfinite(value) else None


def extract_field(
    text: str,
    patterns: Sequence[FieldPattern],
    scale: CurrencyScale = DEFAULT_SCALE,
) -> float | None:
    """
    First pattern (in priority order) whose capture parses wins.
    Unparseable captures count as no-match; the field stays absent.
    """
    for pattern in patterns:
        for match in pattern.regex.finditer(text):
            value = _read_match(pattern, match, scale)
            if value is not None:
                return value
    return None


def extract_metrics(
    text: str,
    auxiliary_text: str | None = None,
    *,
    scale: CurrencyScale = DEFAULT_SCALE,
    patterns: Mapping[str, Sequence[FieldPattern]] = METRIC_PATTERNS,
) -> MetricRecord:
    source = combine_sources(text, auxiliary_text)
    values: dict[str, float] = {}
    for field_name, field_patterns in patterns.items():
        value = extract_field(source, field_patterns, scale)
        if value is not None:
            values[field_name] = value
    return MetricRecord(**values)


# ---------------------------------------------------------------------
# Property attributes
# ---------------------------------------------------------------------

def infer_category(text: str) -> str | None:
    for category, regex in CATEGORY_KEYWORDS:
        if regex.search(text):
            return category
    return None


def _read_attribute(pattern: AttributePattern, match: re.Match[str]) -> Any:
    raw = match.group(1).strip()
    if pattern.kind == "text":
        return raw or None
    if pattern.kind == "int":
        try:
            return int(raw)
        except ValueError:
            return None
    return parse_number(raw)


def _clean_station(value: str) -> str | None:
    cleaned = STATION_TAIL.sub("", value).strip(" ,、")
    return cleaned or None


def extract_property_attributes(text: str, auxiliary_text: str | None = None) -> PropertyAttributes:
    source = combine_sources(text, auxiliary_text)
    values: dict[str, Any] = {}

    for field_name, field_patterns in ATTRIBUTE_PATTERNS.items():
        for pattern in field_patterns:
            match = pattern.regex.search(source)
            if match is None:
                continue
            value = _read_attribute(pattern, match)
            if value is not None:
                values[field_name] = value
                break

    if "nearest_station" in values:
        station = _clean_station(values["nearest_station"])
        if station is None:
            values.pop("nearest_station")
        else:
            values["nearest_station"] = station

    values["category"] = infer_category(source)
    return PropertyAttributes(**values)


def extract(
    text: str,
    auxiliary_text: str | None = None,
    *,
    scale: CurrencyScale = DEFAULT_SCALE,
) -> tuple[MetricRecord, PropertyAttributes]:
    metrics = extract_metrics(text, auxiliary_text, scale=scale)
    attributes = extract_property_attributes(text, auxiliary_text)
    logger.debug(
        "extraction_done",
        extra={
            "context": {
                "fields_found": sorted(metrics.present()),
                "category": attributes.category,
            }
        },
    )
    return metrics, attributes
