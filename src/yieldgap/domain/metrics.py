from __future__ import annotations

import math
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Coarse property categories used for expense / fee lookups
PropertyCategory = Literal["multifamily", "office", "retail", "industrial"]


def _finite_or_none(v: Any) -> Any:
    """
    Every metric is either a finite float or absent.
    NaN / inf collapse to None; bools are rejected so True never reads as 1.0.
    """
    if v is None:
        return None
    if isinstance(v, bool):
        raise ValueError("boolean is not a metric value")
    if isinstance(v, (int, float)):
        f = float(v)
        return f if math.isfinite(f) else None
    return v


class MetricRecord(BaseModel):
    """
    Flat, sparse set of investment metrics.

    Rates are percentage points (8.5 == 8.5%), ltv is a fraction,
    debt_coverage_ratio is a multiple, money is in base currency units.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    # Core CCIM metrics
    yield_rate: Optional[float] = Field(default=None, description="FCR / 総収益率, %")
    loan_constant: Optional[float] = Field(default=None, description="K% / ローン定数, %")
    cash_on_cash_return: Optional[float] = Field(default=None, description="CCR / 自己資金配当率, %")
    debt_coverage_ratio: Optional[float] = Field(default=None, description="DCR, multiple")
    break_even_ratio: Optional[float] = Field(default=None, description="BER / 損益分岐入居率, %")

    # IRR / NPV
    levered_irr: Optional[float] = None
    unlevered_irr: Optional[float] = None
    levered_irr_after_tax: Optional[float] = None
    unlevered_irr_after_tax: Optional[float] = None
    npv: Optional[float] = None
    discount_rate: Optional[float] = None

    # Financial structure
    price: Optional[float] = None
    total_investment: Optional[float] = None
    loan_amount: Optional[float] = None
    equity: Optional[float] = None
    ltv: Optional[float] = Field(default=None, description="loan / price, fraction")

    # Income
    gross_potential_income: Optional[float] = None
    effective_gross_income: Optional[float] = None
    net_operating_income: Optional[float] = None
    before_tax_cash_flow: Optional[float] = None
    after_tax_cash_flow: Optional[float] = None

    # Operating expenses
    operating_expenses: Optional[float] = None
    operating_expense_ratio: Optional[float] = Field(default=None, description="OpEx / EGI, %")
    management_fee: Optional[float] = None
    maintenance_reserve: Optional[float] = None
    capex_reserve: Optional[float] = None

    # Loan terms
    interest_rate: Optional[float] = None
    loan_term: Optional[float] = Field(default=None, description="years")
    amortization_period: Optional[float] = Field(default=None, description="years")
    annual_debt_service: Optional[float] = None

    # Market
    market_cap_rate: Optional[float] = None
    market_rent_growth: Optional[float] = None
    vacancy_rate: Optional[float] = None
    market_vacancy_rate: Optional[float] = None

    # Exit
    holding_period: Optional[float] = Field(default=None, description="years")
    exit_cap_rate: Optional[float] = None
    terminal_value: Optional[float] = None

    # Tax
    depreciation: Optional[float] = None
    tax_rate: Optional[float] = None

    @field_validator("*", mode="before")
    @classmethod
    def _finite(cls, v: Any) -> Any:
        return _finite_or_none(v)

    def present(self) -> dict[str, float]:
        """Only the fields that carry a value."""
        return {k: v for k, v in self.model_dump().items() if v is not None}

    def with_values(self, updates: dict[str, float]) -> "MetricRecord":
        """New record with `updates` applied (re-validated)."""
        data = self.model_dump()
        data.update(updates)
        return MetricRecord.model_validate(data)


METRIC_FIELDS: tuple[str, ...] = tuple(MetricRecord.model_fields)


class PropertyAttributes(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str | None = None
    address: str | None = None
    nearest_station: str | None = None
    walking_minutes: int | None = None
    structure: str | None = None
    age: int | None = Field(default=None, description="building age in years")
    total_units: int | None = None
    total_area: float | None = Field(default=None, description="延床面積, m2")
    building_area: float | None = None
    land_area: float | None = None
    category: PropertyCategory | None = None
    condition: str | None = None

    @field_validator("total_area", "building_area", "land_area", mode="before")
    @classmethod
    def _finite_area(cls, v: Any) -> Any:
        return _finite_or_none(v)
