# src/yieldgap/analysis/imputation.py
from __future__ import annotations

import re
from typing import Callable, Dict, Optional

from yieldgap.domain.metrics import MetricRecord, PropertyAttributes
from yieldgap.domain.standards import DEFAULT_STANDARDS, DomainStandards

_DISTRESSED = re.compile(r"要修繕|要改修|老朽|劣化|distressed|poor", re.IGNORECASE)


def _ratio(numerator: Optional[float], denominator: Optional[float], scale: float = 1.0) -> Optional[float]:
    if numerator is None or denominator is None or denominator == 0:
        return None
    return numerator / denominator * scale


def _difference(a: Optional[float], b: Optional[float]) -> Optional[float]:
    if a is None or b is None:
        return None
    return a - b


# Closed-form relationships, applied in order so later rules see earlier fills.
# Each rule reads the working dict and returns a value or None.
_FORMULAS: tuple[tuple[str, Callable[[Dict[str, Optional[float]]], Optional[float]]], ...] = (
    ("ltv", lambda m: _ratio(m["loan_amount"], m["price"])),
    ("equity", lambda m: _difference(m["price"], m["loan_amount"])),
    ("yield_rate", lambda m: _ratio(m["net_operating_income"], m["price"], 100.0)),
    ("loan_constant", lambda m: _ratio(m["annual_debt_service"], m["loan_amount"], 100.0)),
    ("debt_coverage_ratio", lambda m: _ratio(m["net_operating_income"], m["annual_debt_service"])),
    ("before_tax_cash_flow", lambda m: _difference(m["net_operating_income"], m["annual_debt_service"])),
    ("cash_on_cash_return", lambda m: _ratio(m["before_tax_cash_flow"], m["equity"], 100.0)),
    (
        "break_even_ratio",
        lambda m: _ratio(
            None
            if m["operating_expenses"] is None or m["annual_debt_service"] is None
            else m["operating_expenses"] + m["annual_debt_service"],
            m["gross_potential_income"],
            100.0,
        ),
    ),
    ("operating_expense_ratio", lambda m: _ratio(m["operating_expenses"], m["effective_gross_income"], 100.0)),
)


def _estimate_operating_expenses(
    m: Dict[str, Optional[float]],
    prop: PropertyAttributes,
    standards: DomainStandards,
) -> Dict[str, float]:
    """
    OpEx = EGI x typical expense ratio for the category (default ratio if unknown).
    Also records the ratio used when no ratio is on file.
    """
    egi = m["effective_gross_income"]
    if m["operating_expenses"] is not None or egi is None:
        return {}
    ratio = standards.cpm.expense_ratio_for(prop.category)
    out = {"operating_expenses": egi * ratio}
    if m["operating_expense_ratio"] is None:
        out["operating_expense_ratio"] = ratio * 100.0
    return out


def _estimate_capex_reserve(
    m: Dict[str, Optional[float]],
    prop: PropertyAttributes,
    standards: DomainStandards,
) -> Dict[str, float]:
    """
    Capital reserve = EGI x reserve rate for the building-age band.
    A building described as distressed uses the distressed rate regardless of age.
    """
    egi = m["effective_gross_income"]
    if m["capex_reserve"] is not None or egi is None:
        return {}
    if prop.condition is not None and _DISTRESSED.search(prop.condition):
        return {"capex_reserve": egi * standards.cpm.distressed_capex_reserve}
    if prop.age is None:
        return {}
    return {"capex_reserve": egi * standards.cpm.capex_rate_for_age(prop.age)}


def impute_metrics(
    metrics: MetricRecord,
    prop: PropertyAttributes,
    standards: DomainStandards = DEFAULT_STANDARDS,
) -> MetricRecord:
    """
    Fill absent metrics from present ones.

    - closed-form formulas first (LTV, equity, FCR, K%, DCR, BTCF, CCR, BER, OpEx ratio)
    - then CPM table estimates (operating expenses, capital reserve)
    A field that already has a value, including 0.0, is never overwritten.
    Returns a new record; `metrics` is untouched.
    """
    working: Dict[str, Optional[float]] = metrics.model_dump()

    for field_name, formula in _FORMULAS:
        if working[field_name] is not None:
            continue
        value = formula(working)
        if value is not None:
            working[field_name] = value

    for estimator in (_estimate_operating_expenses, _estimate_capex_reserve):
        working.update(estimator(working, prop, standards))

    return MetricRecord.model_validate(working)
