from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import BPS_DENOMINATOR, U64_MAX

RISK_SCALE_MIN = 1
RISK_SCALE_MAX = 10


class GateParams(BaseModel):
    """Operating parameters set by ``initialize`` and ``reconfigure``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_trade_amount: int = Field(..., ge=0, le=U64_MAX)
    min_liquidity: int = Field(..., ge=0, le=U64_MAX)
    max_slippage: int = Field(..., ge=0, le=BPS_DENOMINATOR)
    risk_threshold: int = Field(..., ge=RISK_SCALE_MIN, le=RISK_SCALE_MAX)


class ThrottleConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    cooldown_sec: float = Field(0.0, ge=0.0)
    max_daily_trades: int = Field(0, ge=0)

    @property
    def enabled(self) -> bool:
        return self.cooldown_sec > 0 or self.max_daily_trades > 0


class ExchangeConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    venue: str = "paper"
    timeout_sec: float = Field(30.0, gt=0.0)


class EventsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    journal_path: Path | None = None
    memory_limit: int = Field(500, ge=1)


class AppSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    authority: str | None = None
    auto_initialize: bool = False
    params: GateParams | None = None
    log_level: str = "INFO"
    throttle: ThrottleConfig = Field(default_factory=ThrottleConfig)
    exchange: ExchangeConfig = Field(default_factory=ExchangeConfig)
    events: EventsConfig = Field(default_factory=EventsConfig)

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        level = (value or "INFO").strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @field_validator("authority")
    @classmethod
    def _strip_authority(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        return text or None


__all__ = [
    "AppSettings",
    "EventsConfig",
    "ExchangeConfig",
    "GateParams",
    "RISK_SCALE_MAX",
    "RISK_SCALE_MIN",
    "ThrottleConfig",
]
