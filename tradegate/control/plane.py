"""Authority-gated administrative operations on the config store."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from ..config.loader import coerce_params
from ..config.schema import GateParams
from ..errors import TradeGateError, UnauthorizedAccess
from ..events.journal import EmergencyPause, EventJournal
from ..metrics.gate import CONTROL_ACTIONS_TOTAL, PAUSED
from ..services.store import ConfigStore, ConfigStoreHolder
from .authority import AuthorizationPolicy, SingleAuthorityPolicy, normalise_identity

LOGGER = logging.getLogger(__name__)


class ControlPlane:
    """Initialize, pause, resume and reconfigure a :class:`ConfigStoreHolder`."""

    def __init__(
        self,
        holder: ConfigStoreHolder,
        *,
        journal: EventJournal | None = None,
        policy: AuthorizationPolicy | None = None,
    ) -> None:
        self._holder = holder
        self._journal = journal or EventJournal()
        self._policy = policy or SingleAuthorityPolicy()

    @property
    def policy(self) -> AuthorizationPolicy:
        return self._policy

    async def initialize(
        self, caller: str, params: GateParams | Mapping[str, Any]
    ) -> ConfigStore:
        """Create the store once; ``caller`` becomes the authority."""

        authority = normalise_identity(caller)
        if authority is None:
            CONTROL_ACTIONS_TOTAL.labels(action="initialize", result="rejected").inc()
            raise UnauthorizedAccess(detail="initialize requires a caller identity")
        try:
            async with self._holder.creation():
                validated = coerce_params(params)
                record = ConfigStore.create(authority, validated)
                self._holder.install(record)
        except TradeGateError as exc:
            CONTROL_ACTIONS_TOTAL.labels(action="initialize", result="rejected").inc()
            LOGGER.warning("initialize rejected", extra={"reason": exc.reason.value})
            raise
        CONTROL_ACTIONS_TOTAL.labels(action="initialize", result="ok").inc()
        PAUSED.set(0)
        LOGGER.info(
            "config store initialized",
            extra={"authority": record.authority, **validated.model_dump()},
        )
        return record

    async def pause(self, caller: str | None) -> EmergencyPause:
        async with self._holder.transaction() as config:
            self._authorize(caller, config, "pause")
            config.is_paused = True
            config.touch()
            event = EmergencyPause(authority=config.authority, timestamp=datetime.now(timezone.utc))
        PAUSED.set(1)
        CONTROL_ACTIONS_TOTAL.labels(action="pause", result="ok").inc()
        LOGGER.warning("trade authorization paused", extra={"authority": event.authority})
        self._journal.emit(event)
        return event

    async def resume(self, caller: str | None) -> None:
        async with self._holder.transaction() as config:
            self._authorize(caller, config, "resume")
            was_paused = config.is_paused
            config.is_paused = False
            config.touch()
        PAUSED.set(0)
        CONTROL_ACTIONS_TOTAL.labels(action="resume", result="ok").inc()
        if was_paused:
            LOGGER.info("trade authorization resumed")

    async def reconfigure(
        self, caller: str | None, params: GateParams | Mapping[str, Any]
    ) -> GateParams:
        async with self._holder.transaction() as config:
            self._authorize(caller, config, "reconfigure")
            try:
                validated = coerce_params(params)
            except TradeGateError:
                CONTROL_ACTIONS_TOTAL.labels(action="reconfigure", result="rejected").inc()
                raise
            previous = config.params()
            config.apply_params(validated)
        CONTROL_ACTIONS_TOTAL.labels(action="reconfigure", result="ok").inc()
        LOGGER.info(
            "config store reconfigured",
            extra={"previous": previous.model_dump(), "current": validated.model_dump()},
        )
        return validated

    def _authorize(self, caller: str | None, config: ConfigStore, action: str) -> None:
        try:
            self._policy.authorize(caller, config, action)  # type: ignore[arg-type]
        except UnauthorizedAccess:
            CONTROL_ACTIONS_TOTAL.labels(action=action, result="unauthorized").inc()
            raise


__all__ = ["ControlPlane"]
