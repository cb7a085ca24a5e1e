from __future__ import annotations

from ..errors import InvalidConfiguration, SlippageExceeded
from ..models import BPS_DENOMINATOR


def min_amount_out(expected: int, max_slippage_bps: int) -> int:
    """Lowest acceptable output for ``expected`` under ``max_slippage_bps``.

    Integer maths truncating toward zero: ``expected * (10000 - bps) // 10000``.
    """

    if expected < 0:
        raise ValueError(f"expected output must be non-negative, got {expected}")
    if max_slippage_bps < 0 or max_slippage_bps > BPS_DENOMINATOR:
        raise InvalidConfiguration(
            detail=f"max_slippage must be within [0, {BPS_DENOMINATOR}] bps, got {max_slippage_bps}"
        )
    return expected * (BPS_DENOMINATOR - max_slippage_bps) // BPS_DENOMINATOR


def ensure_within_slippage(amount_out: int, minimum: int) -> None:
    if amount_out < minimum:
        raise SlippageExceeded(detail=f"filled {amount_out} < minimum {minimum}")


__all__ = ["ensure_within_slippage", "min_amount_out"]
