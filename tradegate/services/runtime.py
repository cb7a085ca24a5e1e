"""Process-level wiring of the gate components for the HTTP shell and CLI."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict

from ..config.loader import load_settings
from ..config.schema import AppSettings
from ..control.authority import AuthorizationPolicy, SingleAuthorityPolicy
from ..control.plane import ControlPlane
from ..events.journal import EventJournal
from ..exchange.base import ExchangeExecutor
from ..exchange.paper import PaperExchangeExecutor
from ..risk.throttle import TradeThrottle
from .authorizer import TradeAuthorizer
from .store import ConfigStore, ConfigStoreHolder

LOGGER = logging.getLogger(__name__)


@dataclass
class GateRuntime:
    settings: AppSettings
    holder: ConfigStoreHolder
    journal: EventJournal
    throttle: TradeThrottle
    executor: ExchangeExecutor
    control: ControlPlane
    authorizer: TradeAuthorizer

    def state(self) -> Dict[str, object]:
        return {
            "initialized": self.holder.initialized,
            "config": self.holder.snapshot(),
            "stats": self.authorizer.stats(),
        }


def build_runtime(
    settings: AppSettings | None = None,
    *,
    executor: ExchangeExecutor | None = None,
    policy: AuthorizationPolicy | None = None,
) -> GateRuntime:
    settings = settings or AppSettings()
    holder = ConfigStoreHolder()
    journal = EventJournal(
        settings.events.journal_path, memory_limit=settings.events.memory_limit
    )
    throttle = TradeThrottle(settings.throttle)
    executor = executor or PaperExchangeExecutor(settings.exchange.venue)
    control = ControlPlane(holder, journal=journal, policy=policy or SingleAuthorityPolicy())
    authorizer = TradeAuthorizer(
        holder,
        executor,
        journal=journal,
        throttle=throttle,
        exchange_timeout_sec=settings.exchange.timeout_sec,
    )
    if settings.auto_initialize:
        _bootstrap(holder, settings)
    return GateRuntime(
        settings=settings,
        holder=holder,
        journal=journal,
        throttle=throttle,
        executor=executor,
        control=control,
        authorizer=authorizer,
    )


def _bootstrap(holder: ConfigStoreHolder, settings: AppSettings) -> None:
    if not settings.authority or settings.params is None:
        raise ValueError("auto_initialize requires both authority and params")
    holder.install(ConfigStore.create(settings.authority, settings.params))
    LOGGER.info("config store bootstrapped from settings", extra={"authority": settings.authority})


_RUNTIME: GateRuntime | None = None
_RUNTIME_LOCK = threading.Lock()


def get_runtime() -> GateRuntime:
    global _RUNTIME
    with _RUNTIME_LOCK:
        if _RUNTIME is None:
            _RUNTIME = build_runtime(load_settings())
        return _RUNTIME


def set_runtime(runtime: GateRuntime) -> None:
    global _RUNTIME
    with _RUNTIME_LOCK:
        _RUNTIME = runtime


def reset_for_tests() -> None:
    global _RUNTIME
    with _RUNTIME_LOCK:
        _RUNTIME = None


__all__ = ["GateRuntime", "build_runtime", "get_runtime", "reset_for_tests", "set_runtime"]
