from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict

from ..models import SettlementResult


class ExchangeExecutor(ABC):
    """Capability that performs the actual swap for an authorized trade."""

    @abstractmethod
    async def swap(
        self,
        *,
        token_in: str | None,
        token_out: str | None,
        amount_in: int,
        min_amount_out: int,
    ) -> SettlementResult:
        """Swap ``amount_in`` of ``token_in`` for at least ``min_amount_out``."""

        ...

    def metrics_tags(self) -> Dict[str, str]:
        return {"venue": "unknown"}


__all__ = ["ExchangeExecutor"]
