"""Value objects flowing through the trade gate."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Dict

U8_MAX = 2**8 - 1
U16_MAX = 2**16 - 1
U64_MAX = 2**64 - 1

BPS_DENOMINATOR = 10_000

# Base58 rendering of the all-zero 32 byte key.
DEFAULT_IDENTIFIER = "1" * 32


def is_default_identifier(value: str | None) -> bool:
    """Return ``True`` for the zero/default identifier forms."""

    if value is None:
        return True
    text = str(value).strip()
    return not text or text == DEFAULT_IDENTIFIER


def _check_unsigned(name: str, value: int, upper: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > upper:
        raise ValueError(f"{name} must be within [0, {upper}], got {value}")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class TradeSignal:
    """A single proposal to trade ``token_identifier`` into ``target_token_identifier``."""

    pool_identifier: str | None
    token_identifier: str | None
    target_token_identifier: str | None
    risk_score: int
    liquidity: int
    trade_amount: int
    expected_output: int
    auto_execute: bool = False

    def __post_init__(self) -> None:
        _check_unsigned("risk_score", self.risk_score, U8_MAX)
        _check_unsigned("liquidity", self.liquidity, U64_MAX)
        _check_unsigned("trade_amount", self.trade_amount, U64_MAX)
        _check_unsigned("expected_output", self.expected_output, U64_MAX)


@dataclass(frozen=True, slots=True)
class SettlementResult:
    amount_in: int
    amount_out: int
    reference: str
    venue: str = "paper"

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class DecisionRecord:
    """Outcome of an authorized signal; emitted and returned, never stored."""

    pool_identifier: str | None
    token_identifier: str | None
    target_token_identifier: str | None
    risk_score: int
    trade_amount: int
    executed: bool
    timestamp: datetime
    min_amount_out: int | None = None
    settlement: SettlementResult | None = None

    def as_dict(self) -> Dict[str, object]:
        return {
            "pool": self.pool_identifier,
            "token": self.token_identifier,
            "target_token": self.target_token_identifier,
            "risk_score": self.risk_score,
            "trade_amount": self.trade_amount,
            "executed": self.executed,
            "timestamp": self.timestamp.isoformat(),
            "min_amount_out": self.min_amount_out,
            "settlement": self.settlement.as_dict() if self.settlement else None,
        }


__all__ = [
    "BPS_DENOMINATOR",
    "DEFAULT_IDENTIFIER",
    "DecisionRecord",
    "SettlementResult",
    "TradeSignal",
    "U16_MAX",
    "U64_MAX",
    "U8_MAX",
    "is_default_identifier",
]
