"""Testing doubles for the exchange executor."""

from __future__ import annotations

import asyncio

from tradegate.exchange.base import ExchangeExecutor
from tradegate.models import SettlementResult


class FakeExchangeExecutor(ExchangeExecutor):
    """Records swap calls; behaviour is tuned per test via attributes."""

    def __init__(self) -> None:
        self.calls: list[dict[str, object]] = []
        self.error: Exception | None = None
        self.delay: float = 0.0
        self.shortfall: int = 0

    async def swap(
        self,
        *,
        token_in: str | None,
        token_out: str | None,
        amount_in: int,
        min_amount_out: int,
    ) -> SettlementResult:
        self.calls.append(
            {
                "token_in": token_in,
                "token_out": token_out,
                "amount_in": amount_in,
                "min_amount_out": min_amount_out,
            }
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return SettlementResult(
            amount_in=amount_in,
            amount_out=min_amount_out - self.shortfall,
            reference=f"fake-{len(self.calls)}",
            venue="fake",
        )

    def metrics_tags(self) -> dict[str, str]:
        return {"venue": "fake"}


__all__ = ["FakeExchangeExecutor"]
