"""Paper executor that settles swaps without touching a venue."""

from __future__ import annotations

import logging
from typing import Dict, List
from uuid import uuid4

from ..models import SettlementResult
from .base import ExchangeExecutor

LOGGER = logging.getLogger(__name__)


class PaperExchangeExecutor(ExchangeExecutor):
    """Fills every swap exactly at the minimum acceptable output."""

    def __init__(self, venue: str = "paper") -> None:
        self._venue = venue
        self.fills: List[SettlementResult] = []

    async def swap(
        self,
        *,
        token_in: str | None,
        token_out: str | None,
        amount_in: int,
        min_amount_out: int,
    ) -> SettlementResult:
        result = SettlementResult(
            amount_in=amount_in,
            amount_out=min_amount_out,
            reference=f"paper-{uuid4().hex}",
            venue=self._venue,
        )
        self.fills.append(result)
        LOGGER.info(
            "paper swap settled",
            extra={
                "token_in": token_in,
                "token_out": token_out,
                "amount_in": amount_in,
                "amount_out": result.amount_out,
                "reference": result.reference,
            },
        )
        return result

    def metrics_tags(self) -> Dict[str, str]:
        return {"venue": self._venue}


__all__ = ["PaperExchangeExecutor"]
