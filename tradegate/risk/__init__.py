"""Signal guards, slippage bounds and execution throttling."""

from .guards import GUARDS, check, evaluate
from .slippage import ensure_within_slippage, min_amount_out
from .throttle import TradeThrottle

__all__ = [
    "GUARDS",
    "TradeThrottle",
    "check",
    "ensure_within_slippage",
    "evaluate",
    "min_amount_out",
]
