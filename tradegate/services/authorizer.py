"""Trade authorizer: guards, slippage bound, settlement and statistics."""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict

from ..errors import (
    ExchangeError,
    ExchangeTimeout,
    NoPendingTrade,
    SignalRejected,
    SlippageExceeded,
    TradeGateError,
)
from ..events.journal import EventJournal, SignalProcessed
from ..exchange.base import ExchangeExecutor
from ..exchange.paper import PaperExchangeExecutor
from ..metrics.gate import EXECUTIONS_TOTAL, SIGNALS_TOTAL
from ..models import DecisionRecord, SettlementResult, TradeSignal
from ..risk import guards
from ..risk.slippage import ensure_within_slippage, min_amount_out
from ..risk.throttle import TradeThrottle
from .store import ConfigStoreHolder

LOGGER = logging.getLogger(__name__)

DEFAULT_EXCHANGE_TIMEOUT_SEC = 30.0


@dataclass
class TradeStats:
    failed_trades: int = 0
    total_volume: int = 0
    last_trade_ts: str | None = None
    last_reference: str | None = None

    def as_dict(self) -> Dict[str, object]:
        return {
            "failed_trades": self.failed_trades,
            "total_volume": self.total_volume,
            "last_trade_ts": self.last_trade_ts,
            "last_reference": self.last_reference,
        }


class TradeAuthorizer:
    """Runs each signal through the gate and settles the ones asking for it."""

    def __init__(
        self,
        holder: ConfigStoreHolder,
        executor: ExchangeExecutor | None = None,
        *,
        journal: EventJournal | None = None,
        throttle: TradeThrottle | None = None,
        exchange_timeout_sec: float = DEFAULT_EXCHANGE_TIMEOUT_SEC,
    ) -> None:
        if exchange_timeout_sec <= 0:
            raise ValueError("exchange_timeout_sec must be positive")
        self._holder = holder
        self._executor = executor or PaperExchangeExecutor()
        self._journal = journal or EventJournal()
        self._throttle = throttle or TradeThrottle()
        self._timeout = float(exchange_timeout_sec)
        self._stats = TradeStats()
        self._stats_lock = threading.Lock()

    @property
    def executor(self) -> ExchangeExecutor:
        return self._executor

    @property
    def throttle(self) -> TradeThrottle:
        return self._throttle

    async def process_signal(self, signal: TradeSignal) -> DecisionRecord:
        """Authorize ``signal`` and, when ``auto_execute`` is set, settle it.

        Rejections and exchange failures are raised to the caller. The
        ``total_trades`` increment is applied before the exchange call and
        stays in place when the call fails, times out or is cancelled.
        """

        async with self._holder.transaction() as config:
            try:
                guards.evaluate(signal, config)
            except SignalRejected as exc:
                SIGNALS_TOTAL.labels(result="rejected", reason=exc.reason.value).inc()
                LOGGER.warning(
                    "signal rejected",
                    extra={
                        "reason": exc.reason.value,
                        "pool": signal.pool_identifier,
                        "token": signal.token_identifier,
                        "risk_score": signal.risk_score,
                    },
                )
                raise

            bound: int | None = None
            settlement: SettlementResult | None = None
            if signal.auto_execute:
                try:
                    self._throttle.ensure_allowed()
                    bound = min_amount_out(signal.expected_output, config.max_slippage)
                except TradeGateError as exc:
                    SIGNALS_TOTAL.labels(result="rejected", reason=exc.reason.value).inc()
                    LOGGER.warning("execution blocked", extra={"reason": exc.reason.value})
                    raise
                config.total_trades += 1
                config.touch()
                settlement = await self._settle(signal, bound)

        decision = DecisionRecord(
            pool_identifier=signal.pool_identifier,
            token_identifier=signal.token_identifier,
            target_token_identifier=signal.target_token_identifier,
            risk_score=signal.risk_score,
            trade_amount=signal.trade_amount,
            executed=settlement is not None,
            timestamp=datetime.now(timezone.utc),
            min_amount_out=bound,
            settlement=settlement,
        )
        SIGNALS_TOTAL.labels(result="accepted", reason="").inc()
        self._journal.emit(SignalProcessed.from_decision(decision))
        return decision

    async def _settle(self, signal: TradeSignal, bound: int) -> SettlementResult:
        LOGGER.info(
            "executing trade",
            extra={
                "token": signal.token_identifier,
                "target_token": signal.target_token_identifier,
                "amount_in": signal.trade_amount,
                "min_amount_out": bound,
                **self._executor.metrics_tags(),
            },
        )
        try:
            result = await asyncio.wait_for(
                self._executor.swap(
                    token_in=signal.token_identifier,
                    token_out=signal.target_token_identifier,
                    amount_in=signal.trade_amount,
                    min_amount_out=bound,
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as exc:
            self._record_failure("timeout")
            raise ExchangeTimeout(detail=f"no settlement within {self._timeout:g}s") from exc
        except asyncio.CancelledError:
            self._record_failure("cancelled")
            raise
        except TradeGateError:
            self._record_failure("error")
            raise
        except Exception as exc:
            self._record_failure("error")
            LOGGER.error("exchange executor failed", extra={"error": str(exc)}, exc_info=True)
            raise ExchangeError(detail=str(exc)) from exc

        try:
            ensure_within_slippage(result.amount_out, bound)
        except SlippageExceeded:
            self._record_failure("slippage")
            raise

        self._throttle.record_trade()
        with self._stats_lock:
            self._stats.total_volume += result.amount_in
            self._stats.last_trade_ts = datetime.now(timezone.utc).isoformat()
            self._stats.last_reference = result.reference
        EXECUTIONS_TOTAL.labels(outcome="settled").inc()
        LOGGER.info(
            "trade settled",
            extra={"reference": result.reference, "amount_out": result.amount_out},
        )
        return result

    def _record_failure(self, outcome: str) -> None:
        with self._stats_lock:
            self._stats.failed_trades += 1
        EXECUTIONS_TOTAL.labels(outcome=outcome).inc()
        LOGGER.warning("trade execution failed", extra={"outcome": outcome})

    async def record_success(self, reference: str | None = None) -> int:
        """Count a settlement the caller has confirmed; returns the new total."""

        async with self._holder.transaction() as config:
            if config.successful_trades >= config.total_trades:
                raise NoPendingTrade(
                    detail=f"successful={config.successful_trades} total={config.total_trades}"
                )
            config.successful_trades += 1
            config.touch()
            confirmed = config.successful_trades
        EXECUTIONS_TOTAL.labels(outcome="confirmed").inc()
        LOGGER.info("settlement confirmed", extra={"reference": reference, "successful": confirmed})
        return confirmed

    def stats(self) -> Dict[str, object]:
        with self._stats_lock:
            payload = self._stats.as_dict()
        record = self._holder.snapshot() or {}
        payload["total_trades"] = record.get("total_trades", 0)
        payload["successful_trades"] = record.get("successful_trades", 0)
        payload["throttle"] = self._throttle.snapshot()
        return payload


__all__ = ["DEFAULT_EXCHANGE_TIMEOUT_SEC", "TradeAuthorizer", "TradeStats"]
