# src/yieldgap/services/guardrails.py
from __future__ import annotations

from typing import List

from yieldgap.adapters.logging_utils import get_logger
from yieldgap.domain.metrics import MetricRecord
from yieldgap.domain.standards import DEFAULT_STANDARDS, DomainStandards
from yieldgap.domain.underwriting import Flag

logger = get_logger(__name__)


def check_consistency(
    metrics: MetricRecord,
    standards: DomainStandards = DEFAULT_STANDARDS,
) -> List[Flag]:
    """
    Advisory sanity checks over validated metrics.

    Produces a list of Flag:
        Flag(code="DCR_OUT_OF_RANGE", severity="warning",
             message="...human readable...", context={...raw numbers...})

    These do *not* block anything and never change a value; they mark
    combinations that are unlikely to all be true at once.
    """
    flags: List[Flag] = []

    fcr = metrics.yield_rate
    k = metrics.loan_constant
    ccr = metrics.cash_on_cash_return
    dcr = metrics.debt_coverage_ratio
    ber = metrics.break_even_ratio

    # ------------------------------------------------------------------
    # 1) FCR vs K% vs CCR
    #    FCR > K% (positive leverage) should come with CCR > FCR
    # ------------------------------------------------------------------
    if fcr is not None and k is not None and ccr is not None:
        expected_positive = fcr > k
        actual_positive = ccr > fcr
        if expected_positive != actual_positive:
            flags.append(
                Flag(
                    code="LEVERAGE_RELATIONSHIP_INCONSISTENT",
                    message="FCR vs K% vs CCR relationship inconsistency detected.",
                    context={"yield_rate": fcr, "loan_constant": k, "cash_on_cash_return": ccr},
                )
            )

    # ------------------------------------------------------------------
    # 2) DCR plausibility
    # ------------------------------------------------------------------
    dcr_low, dcr_high = standards.ccim.plausible_dcr
    if dcr is not None and (dcr < dcr_low or dcr > dcr_high):
        flags.append(
            Flag(
                code="DCR_OUT_OF_RANGE",
                message=f"DCR {dcr:.2f} is outside the plausible range [{dcr_low}, {dcr_high}].",
                context={"debt_coverage_ratio": dcr, "low": dcr_low, "high": dcr_high},
            )
        )

    # ------------------------------------------------------------------
    # 3) BER plausibility
    # ------------------------------------------------------------------
    ber_low, ber_high = standards.ccim.plausible_ber
    if ber is not None and (ber < ber_low or ber > ber_high):
        flags.append(
            Flag(
                code="BER_OUT_OF_RANGE",
                message=f"BER {ber:.1f}% is outside the plausible range [{ber_low}%, {ber_high}%].",
                context={"break_even_ratio": ber, "low": ber_low, "high": ber_high},
            )
        )

    if flags:
        logger.info("consistency_flags", extra={"context": {"flags": [f.code for f in flags]}})

    return flags
