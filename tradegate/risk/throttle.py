"""Cooldown and daily cap for executed trades."""

from __future__ import annotations

import threading
import time
from datetime import date, datetime, timezone
from typing import Callable, Dict

from ..config.schema import ThrottleConfig
from ..errors import RejectReason, TradeThrottled


class TradeThrottle:
    """Blocks executions inside the cooldown window or past the daily cap.

    Zero values disable the matching check. Usage is recorded only after a
    settlement succeeds.
    """

    def __init__(
        self,
        config: ThrottleConfig | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config or ThrottleConfig()
        self._clock = clock
        self._lock = threading.Lock()
        self._last_trade_ts: float | None = None
        self._daily_counts: Dict[date, int] = {}

    @property
    def config(self) -> ThrottleConfig:
        return self._config

    def configure(self, config: ThrottleConfig) -> None:
        with self._lock:
            self._config = config

    def _today(self, now: float) -> date:
        return datetime.fromtimestamp(now, tz=timezone.utc).date()

    def cooldown_remaining(self, now: float | None = None) -> float:
        now = self._clock() if now is None else now
        with self._lock:
            if self._config.cooldown_sec <= 0 or self._last_trade_ts is None:
                return 0.0
            return max(0.0, self._last_trade_ts + self._config.cooldown_sec - now)

    def trades_today(self, now: float | None = None) -> int:
        now = self._clock() if now is None else now
        with self._lock:
            return self._daily_counts.get(self._today(now), 0)

    def ensure_allowed(self, now: float | None = None) -> None:
        now = self._clock() if now is None else now
        remaining = self.cooldown_remaining(now)
        if remaining > 0:
            raise TradeThrottled(
                RejectReason.COOLDOWN_ACTIVE, detail=f"{remaining:.1f}s remaining"
            )
        limit = self._config.max_daily_trades
        if limit > 0:
            count = self.trades_today(now)
            if count >= limit:
                raise TradeThrottled(
                    RejectReason.DAILY_LIMIT_EXCEEDED, detail=f"{count}/{limit} trades today"
                )

    def record_trade(self, now: float | None = None) -> None:
        now = self._clock() if now is None else now
        today = self._today(now)
        with self._lock:
            self._last_trade_ts = now
            self._daily_counts[today] = self._daily_counts.get(today, 0) + 1
            for day in [day for day in self._daily_counts if day < today]:
                del self._daily_counts[day]

    def snapshot(self) -> Dict[str, object]:
        now = self._clock()
        return {
            "enabled": self._config.enabled,
            "cooldown_sec": self._config.cooldown_sec,
            "cooldown_remaining": round(self.cooldown_remaining(now), 2),
            "max_daily_trades": self._config.max_daily_trades,
            "trades_today": self.trades_today(now),
        }


__all__ = ["TradeThrottle"]
