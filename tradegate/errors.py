"""Rejection codes and exceptions raised by the trade gate."""

from __future__ import annotations

from enum import Enum


class RejectReason(str, Enum):
    BOT_PAUSED = "BOT_PAUSED"
    INVALID_POOL_ADDRESS = "INVALID_POOL_ADDRESS"
    RISK_SCORE_TOO_LOW = "RISK_SCORE_TOO_LOW"
    INSUFFICIENT_LIQUIDITY = "INSUFFICIENT_LIQUIDITY"
    EXCEEDS_MAX_TRADE_AMOUNT = "EXCEEDS_MAX_TRADE_AMOUNT"
    INVALID_TOKEN_MINT = "INVALID_TOKEN_MINT"
    UNAUTHORIZED_ACCESS = "UNAUTHORIZED_ACCESS"
    SLIPPAGE_EXCEEDED = "SLIPPAGE_EXCEEDED"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    ALREADY_INITIALIZED = "ALREADY_INITIALIZED"
    NOT_INITIALIZED = "NOT_INITIALIZED"
    NO_PENDING_TRADE = "NO_PENDING_TRADE"
    COOLDOWN_ACTIVE = "COOLDOWN_ACTIVE"
    DAILY_LIMIT_EXCEEDED = "DAILY_LIMIT_EXCEEDED"
    EXCHANGE_ERROR = "EXCHANGE_ERROR"
    EXCHANGE_TIMEOUT = "EXCHANGE_TIMEOUT"


_MESSAGES: dict[RejectReason, str] = {
    RejectReason.BOT_PAUSED: "The trading bot is currently paused",
    RejectReason.INVALID_POOL_ADDRESS: "Invalid pool address provided",
    RejectReason.RISK_SCORE_TOO_LOW: "Risk score is below the minimum threshold",
    RejectReason.INSUFFICIENT_LIQUIDITY: "Pool liquidity is insufficient",
    RejectReason.EXCEEDS_MAX_TRADE_AMOUNT: "Trade amount exceeds maximum allowed",
    RejectReason.INVALID_TOKEN_MINT: "Invalid token mint address",
    RejectReason.UNAUTHORIZED_ACCESS: "Unauthorized access attempt",
    RejectReason.SLIPPAGE_EXCEEDED: "Slippage tolerance exceeded",
    RejectReason.INVALID_CONFIGURATION: "Configuration values are out of range",
    RejectReason.ALREADY_INITIALIZED: "Config store is already initialized",
    RejectReason.NOT_INITIALIZED: "Config store has not been initialized",
    RejectReason.NO_PENDING_TRADE: "No attempted trade is awaiting confirmation",
    RejectReason.COOLDOWN_ACTIVE: "Trading is in cooldown period",
    RejectReason.DAILY_LIMIT_EXCEEDED: "Daily trade limit exceeded",
    RejectReason.EXCHANGE_ERROR: "Exchange executor failed",
    RejectReason.EXCHANGE_TIMEOUT: "Exchange executor timed out",
}


def describe(reason: RejectReason) -> str:
    return _MESSAGES.get(reason, reason.value)


class TradeGateError(RuntimeError):
    """Base error; every subclass carries a machine readable ``reason``."""

    default_reason: RejectReason = RejectReason.INVALID_CONFIGURATION

    def __init__(self, reason: RejectReason | None = None, detail: str | None = None) -> None:
        self.reason = reason or self.default_reason
        self.detail = detail
        message = describe(self.reason)
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class SignalRejected(TradeGateError):
    """Raised by the guard pipeline when a signal fails a check."""

    default_reason = RejectReason.BOT_PAUSED


class TradeThrottled(TradeGateError):
    default_reason = RejectReason.COOLDOWN_ACTIVE


class UnauthorizedAccess(TradeGateError):
    default_reason = RejectReason.UNAUTHORIZED_ACCESS


class InvalidConfiguration(TradeGateError):
    default_reason = RejectReason.INVALID_CONFIGURATION


class AlreadyInitialized(TradeGateError):
    default_reason = RejectReason.ALREADY_INITIALIZED


class NotInitialized(TradeGateError):
    default_reason = RejectReason.NOT_INITIALIZED


class NoPendingTrade(TradeGateError):
    default_reason = RejectReason.NO_PENDING_TRADE


class SlippageExceeded(TradeGateError):
    default_reason = RejectReason.SLIPPAGE_EXCEEDED


class ExchangeError(TradeGateError):
    """Raised when the exchange executor fails to settle a swap."""

    default_reason = RejectReason.EXCHANGE_ERROR


class ExchangeTimeout(ExchangeError):
    default_reason = RejectReason.EXCHANGE_TIMEOUT


__all__ = [
    "AlreadyInitialized",
    "ExchangeError",
    "ExchangeTimeout",
    "InvalidConfiguration",
    "NoPendingTrade",
    "NotInitialized",
    "RejectReason",
    "SignalRejected",
    "SlippageExceeded",
    "TradeGateError",
    "TradeThrottled",
    "UnauthorizedAccess",
    "describe",
]
