"""Config store record and the lock-guarded holder around it."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import AsyncIterator, Dict

from ..config.schema import GateParams
from ..errors import AlreadyInitialized, NotInitialized


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ConfigStore:
    authority: str
    max_trade_amount: int
    min_liquidity: int
    max_slippage: int
    risk_threshold: int
    is_paused: bool = False
    total_trades: int = 0
    successful_trades: int = 0
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __setattr__(self, name: str, value: object) -> None:
        if name == "authority" and "authority" in self.__dict__:
            raise AttributeError("authority is immutable once the store exists")
        super().__setattr__(name, value)

    @classmethod
    def create(cls, authority: str, params: GateParams) -> "ConfigStore":
        return cls(
            authority=authority,
            max_trade_amount=params.max_trade_amount,
            min_liquidity=params.min_liquidity,
            max_slippage=params.max_slippage,
            risk_threshold=params.risk_threshold,
        )

    def params(self) -> GateParams:
        return GateParams(
            max_trade_amount=self.max_trade_amount,
            min_liquidity=self.min_liquidity,
            max_slippage=self.max_slippage,
            risk_threshold=self.risk_threshold,
        )

    def apply_params(self, params: GateParams) -> None:
        self.max_trade_amount = params.max_trade_amount
        self.min_liquidity = params.min_liquidity
        self.max_slippage = params.max_slippage
        self.risk_threshold = params.risk_threshold
        self.touch()

    def touch(self) -> None:
        self.updated_at = _utcnow()

    def as_dict(self) -> Dict[str, object]:
        return {
            "authority": self.authority,
            "max_trade_amount": self.max_trade_amount,
            "min_liquidity": self.min_liquidity,
            "max_slippage": self.max_slippage,
            "risk_threshold": self.risk_threshold,
            "is_paused": self.is_paused,
            "total_trades": self.total_trades,
            "successful_trades": self.successful_trades,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


class ConfigStoreHolder:
    """Owns one :class:`ConfigStore` and serialises every mutation on it.

    Each operation runs inside :meth:`transaction`, so no caller observes a
    record mid-update from another in-flight operation.
    """

    def __init__(self) -> None:
        self._record: ConfigStore | None = None
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._record is not None

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[ConfigStore]:
        async with self._lock:
            if self._record is None:
                raise NotInitialized()
            yield self._record

    @asynccontextmanager
    async def creation(self) -> AsyncIterator[None]:
        async with self._lock:
            if self._record is not None:
                raise AlreadyInitialized()
            yield

    def install(self, record: ConfigStore) -> None:
        """Install the record; only valid inside :meth:`creation`."""

        if self._record is not None:
            raise AlreadyInitialized()
        self._record = record

    def snapshot(self) -> Dict[str, object] | None:
        record = self._record
        return record.as_dict() if record is not None else None


__all__ = ["ConfigStore", "ConfigStoreHolder"]
