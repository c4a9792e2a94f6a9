# src/yieldgap/analysis/irr.py
from __future__ import annotations

from typing import Optional

from yieldgap.domain.metrics import MetricRecord
from yieldgap.domain.standards import DEFAULT_STANDARDS, DomainStandards
from yieldgap.domain.underwriting import IRRAnalysis


def _spread(a: Optional[float], b: Optional[float]) -> Optional[float]:
    if a is None or b is None:
        return None
    return a - b


def analyze_irr(
    metrics: MetricRecord,
    standards: DomainStandards = DEFAULT_STANDARDS,
) -> IRRAnalysis:
    """
    Levered vs unlevered IRR.

    The benchmark profile is the most demanding risk profile whose minimum
    IRR is met (levered IRR, or unlevered when no levered figure is given);
    meets_target says whether that profile's target IRR is reached as well.
    """
    reference = metrics.levered_irr if metrics.levered_irr is not None else metrics.unlevered_irr

    profile: Optional[str] = None
    meets_target: Optional[bool] = None
    if reference is not None:
        qualifying = [
            (name, bench)
            for name, bench in standards.ccim.irr_benchmarks.items()
            if reference >= bench.min
        ]
        if qualifying:
            profile, bench = max(qualifying, key=lambda item: item[1].min)
            meets_target = reference >= bench.target
        else:
            meets_target = False

    return IRRAnalysis(
        levered_irr=metrics.levered_irr,
        unlevered_irr=metrics.unlevered_irr,
        leverage_effect=_spread(metrics.levered_irr, metrics.unlevered_irr),
        levered_irr_after_tax=metrics.levered_irr_after_tax,
        unlevered_irr_after_tax=metrics.unlevered_irr_after_tax,
        tax_leverage_effect=_spread(metrics.levered_irr_after_tax, metrics.unlevered_irr_after_tax),
        benchmark_profile=profile,
        meets_target=meets_target,
    )
