# src/yieldgap/domain/standards.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class _Table(_Frozen):
    """
    A fixed set of named rows. Read-only: rows are fields of a frozen model,
    so neither assignment nor item assignment can change a loaded table.
    """

    def get(self, key: str | None, default: Any = None) -> Any:
        if key is None or key not in type(self).model_fields:
            return default
        return getattr(self, key)

    def items(self) -> tuple[tuple[str, Any], ...]:
        return tuple((name, getattr(self, name)) for name in type(self).model_fields)


class ExpenseRatioBand(_Frozen):
    min: float
    max: float
    typical: float


class ExpenseRatios(_Table):
    multifamily: ExpenseRatioBand = ExpenseRatioBand(min=0.35, max=0.50, typical=0.42)
    office: ExpenseRatioBand = ExpenseRatioBand(min=0.30, max=0.45, typical=0.38)
    retail: ExpenseRatioBand = ExpenseRatioBand(min=0.25, max=0.40, typical=0.32)
    industrial: ExpenseRatioBand = ExpenseRatioBand(min=0.15, max=0.30, typical=0.22)


class VacancyBands(_Table):
    # vacancy by market condition, fractions
    excellent: float = 0.03
    good: float = 0.05
    average: float = 0.08
    poor: float = 0.12
    distressed: float = 0.20


class ManagementFees(_Table):
    # typical fee as a fraction of EGI
    multifamily: float = 0.04
    office: float = 0.03
    retail: float = 0.05
    industrial: float = 0.02


class CpmStandards(_Frozen):
    """
    Property-operations benchmarks (CPM).
    Ratios are fractions of EGI.
    """
    operating_expense_ratios: ExpenseRatios = Field(default_factory=ExpenseRatios)
    default_operating_expense_ratio: float = 0.40

    vacancy_rates: VacancyBands = Field(default_factory=VacancyBands)

    # capital reserve as % of EGI, selected by building age
    # (max_age, rate) ascending; anything older uses aged_capex_reserve
    capex_reserve_bands: tuple[tuple[float, float], ...] = (
        (5, 0.02),
        (15, 0.03),
        (25, 0.05),
    )
    aged_capex_reserve: float = 0.08
    distressed_capex_reserve: float = 0.12

    management_fees: ManagementFees = Field(default_factory=ManagementFees)

    def expense_ratio_for(self, category: str | None) -> float:
        band = self.operating_expense_ratios.get(category)
        return band.typical if band is not None else self.default_operating_expense_ratio

    def capex_rate_for_age(self, age: float) -> float:
        for max_age, rate in self.capex_reserve_bands:
            if age <= max_age:
                return rate
        return self.aged_capex_reserve

    def is_aged(self, age: float) -> bool:
        return not self.capex_reserve_bands or age > self.capex_reserve_bands[-1][0]


class DcrStandards(_Table):
    excellent: float = 1.50
    good: float = 1.35
    acceptable: float = 1.25
    minimum: float = 1.20
    risky: float = 1.10


class BerStandards(_Table):
    excellent: float = 70.0
    good: float = 80.0
    acceptable: float = 85.0
    risky: float = 90.0
    dangerous: float = 95.0


class IrrBenchmark(_Frozen):
    min: float
    target: float


class IrrBenchmarks(_Table):
    core: IrrBenchmark = IrrBenchmark(min=6, target=8)
    core_plus: IrrBenchmark = IrrBenchmark(min=8, target=10)
    value_add: IrrBenchmark = IrrBenchmark(min=10, target=15)
    opportunistic: IrrBenchmark = IrrBenchmark(min=15, target=25)


class ValuationThresholds(_Frozen):
    """
    Investment grade decision table:
      A: NPV > 0, DCR >= grade_a_dcr, BER <= grade_a_ber
      B: NPV > 0, DCR >= grade_b_dcr
      C: DCR >= grade_c_dcr
    """
    grade_a_dcr: float = 1.25
    grade_a_ber: float = 85.0
    grade_b_dcr: float = 1.20
    grade_c_dcr: float = 1.15


class CcimFramework(_Frozen):
    """
    Investment-analysis thresholds (CCIM).
    Yield gap in percentage points, BER in %, DCR as a multiple.
    """
    # yield gap floor per leverage strength, strongest first
    leverage_thresholds: tuple[tuple[str, float], ...] = (
        ("excellent", 1.5),
        ("good", 1.0),
        ("moderate", 0.5),
        ("weak", 0.0),
    )
    dcr_standards: DcrStandards = Field(default_factory=DcrStandards)
    ber_standards: BerStandards = Field(default_factory=BerStandards)
    irr_benchmarks: IrrBenchmarks = Field(default_factory=IrrBenchmarks)
    valuation: ValuationThresholds = Field(default_factory=ValuationThresholds)

    # exit cap expansion over the going-in yield, percentage points
    cap_rate_expansion_risk: float = 0.50
    cap_rate_stress_test: float = 1.00

    # stability score yield-gap bands (floor, points), strongest first
    stability_yield_gap_bands: tuple[tuple[float, float], ...] = (
        (2.0, 20.0),
        (1.0, 15.0),
        (0.5, 10.0),
        (0.0, 5.0),
    )
    stability_negative_gap_points: float = -15.0

    # plausible ranges used by the consistency check
    plausible_dcr: tuple[float, float] = (0.5, 5.0)
    plausible_ber: tuple[float, float] = (30.0, 120.0)


class DomainStandards(_Frozen):
    """
    Static, process-wide benchmark tables.
    Construct once and pass into each analyzer; tests substitute their own.
    """
    cpm: CpmStandards = Field(default_factory=CpmStandards)
    ccim: CcimFramework = Field(default_factory=CcimFramework)


DEFAULT_STANDARDS = DomainStandards()
