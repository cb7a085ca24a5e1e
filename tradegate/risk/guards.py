"""Ordered guard pipeline deciding whether a trade signal may proceed."""

from __future__ import annotations

from typing import Callable, Sequence, Tuple

from ..errors import RejectReason, SignalRejected
from ..models import TradeSignal, is_default_identifier
from ..services.store import ConfigStore

GuardCheck = Callable[[TradeSignal, ConfigStore], bool]


def _not_paused(signal: TradeSignal, config: ConfigStore) -> bool:
    return not config.is_paused


def _pool_present(signal: TradeSignal, config: ConfigStore) -> bool:
    return not is_default_identifier(signal.pool_identifier)


def _risk_score_ok(signal: TradeSignal, config: ConfigStore) -> bool:
    # Higher scores count as safer: a signal below the threshold is rejected.
    return signal.risk_score >= config.risk_threshold


def _liquidity_ok(signal: TradeSignal, config: ConfigStore) -> bool:
    return signal.liquidity >= config.min_liquidity


def _amount_ok(signal: TradeSignal, config: ConfigStore) -> bool:
    return signal.trade_amount <= config.max_trade_amount


def _token_safe(signal: TradeSignal, config: ConfigStore) -> bool:
    # Placeholder for blacklist/honeypot analysis: only rejects the default mint.
    return not is_default_identifier(signal.token_identifier)


GUARDS: Sequence[Tuple[RejectReason, GuardCheck]] = (
    (RejectReason.BOT_PAUSED, _not_paused),
    (RejectReason.INVALID_POOL_ADDRESS, _pool_present),
    (RejectReason.RISK_SCORE_TOO_LOW, _risk_score_ok),
    (RejectReason.INSUFFICIENT_LIQUIDITY, _liquidity_ok),
    (RejectReason.EXCEEDS_MAX_TRADE_AMOUNT, _amount_ok),
    (RejectReason.INVALID_TOKEN_MINT, _token_safe),
)


def check(signal: TradeSignal, config: ConfigStore) -> Tuple[bool, RejectReason | None]:
    """Return ``(ok, reason)`` for the first failing guard, in order."""

    for reason, guard in GUARDS:
        if not guard(signal, config):
            return False, reason
    return True, None


def evaluate(signal: TradeSignal, config: ConfigStore) -> None:
    """Raise :class:`SignalRejected` when ``signal`` fails any guard."""

    ok, reason = check(signal, config)
    if not ok:
        raise SignalRejected(reason)


__all__ = ["GUARDS", "GuardCheck", "check", "evaluate"]
