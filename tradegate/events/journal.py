"""Event records emitted by the gate and the journal that receives them."""

from __future__ import annotations

import json
import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Any, Deque, Dict, List, Union

from ..models import DecisionRecord

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SignalProcessed:
    pool: str | None
    token: str | None
    risk_score: int
    trade_amount: int
    executed: bool
    timestamp: datetime

    event: str = "signal_processed"

    @classmethod
    def from_decision(cls, decision: DecisionRecord) -> "SignalProcessed":
        return cls(
            pool=decision.pool_identifier,
            token=decision.token_identifier,
            risk_score=decision.risk_score,
            trade_amount=decision.trade_amount,
            executed=decision.executed,
            timestamp=decision.timestamp,
        )

    def payload(self) -> Dict[str, Any]:
        return {
            "pool": self.pool,
            "token": self.token,
            "risk_score": self.risk_score,
            "trade_amount": self.trade_amount,
            "executed": self.executed,
        }


@dataclass(frozen=True, slots=True)
class EmergencyPause:
    authority: str
    timestamp: datetime

    event: str = "emergency_pause"

    def payload(self) -> Dict[str, Any]:
        return {"authority": self.authority}


GateEvent = Union[SignalProcessed, EmergencyPause]


class EventJournal:
    """Keeps recent events in memory and optionally appends them as JSONL."""

    def __init__(self, path: Path | str | None = None, *, memory_limit: int = 500) -> None:
        self._path = Path(path) if path else None
        self._lock = Lock()
        self._records: Deque[Dict[str, Any]] = deque(maxlen=memory_limit)

    @property
    def path(self) -> Path | None:
        return self._path

    def emit(self, event: GateEvent) -> Dict[str, Any]:
        record = {
            "event": event.event,
            "ts": event.timestamp.isoformat(),
            "payload": event.payload(),
        }
        with self._lock:
            self._records.append(record)
            if self._path is not None:
                self._append(record)
        LOGGER.info("gate event", extra={"event": event.event, **record["payload"]})
        return record

    def _append(self, record: Dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(json.dumps(record, sort_keys=True, ensure_ascii=False))
                handle.write("\n")
        except OSError as exc:
            # The in-memory record is kept; the state change it describes has already happened.
            LOGGER.error(
                "failed to append gate event",
                extra={"path": str(self._path), "error": str(exc)},
            )

    def records(self, event: str | None = None, limit: int | None = None) -> List[Dict[str, Any]]:
        with self._lock:
            items = [dict(item) for item in self._records]
        if event:
            items = [item for item in items if item["event"] == event]
        if limit is not None and limit >= 0:
            items = items[-limit:] if limit else []
        return items

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


__all__ = ["EmergencyPause", "EventJournal", "GateEvent", "SignalProcessed"]
