# src/yieldgap/adapters/config.py
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    ENGINE_VERSION: str = Field(default="CPM/CCIM v1.0")
    REPORT_LANGUAGE: Literal["ja", "en"] = Field(default="ja")

    # -----------------------------
    # Currency scale heuristic
    # -----------------------------
    # Bare amounts (no 円/万/百万/億 suffix) are rescaled:
    #   |v| < MILLIONS_BELOW   -> v * 1,000,000
    #   |v| < THOUSANDS_BELOW  -> v * 1,000   (千円 convention)
    CURRENCY_SCALE_HEURISTIC: bool = Field(default=True)
    CURRENCY_MILLIONS_BELOW: float = Field(default=1_000.0)
    CURRENCY_THOUSANDS_BELOW: float = Field(default=1_000_000.0)

    model_config = SettingsConfigDict(
        env_prefix="YIELDGAP_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("CURRENCY_MILLIONS_BELOW", "CURRENCY_THOUSANDS_BELOW", mode="before")
    @classmethod
    def _non_negative_amount(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().replace(",", "")
        try:
            f = float(v)
        except (TypeError, ValueError) as err:
            raise ValueError("currency threshold must be numeric") from err
        if f < 0:
            raise ValueError("currency threshold must be non-negative")
        return f


config = AppConfig()
