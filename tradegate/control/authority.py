"""Authorization policies for control plane operations."""

from __future__ import annotations

import logging
import secrets
from abc import ABC, abstractmethod
from typing import Literal

from ..errors import UnauthorizedAccess
from ..services.store import ConfigStore

LOGGER = logging.getLogger(__name__)

ControlAction = Literal["pause", "resume", "reconfigure"]


def normalise_identity(caller: str | None) -> str | None:
    """Strip surrounding whitespace; blank identities become ``None``."""

    if caller is None:
        return None
    text = str(caller).strip()
    return text or None


class AuthorizationPolicy(ABC):
    """Decides whether ``caller`` may perform ``action`` on ``config``."""

    @abstractmethod
    def is_authorized(self, caller: str | None, config: ConfigStore, action: ControlAction) -> bool:
        ...

    def authorize(self, caller: str | None, config: ConfigStore, action: ControlAction) -> None:
        identity = normalise_identity(caller)
        if not self.is_authorized(identity, config, action):
            LOGGER.warning(
                "control action denied",
                extra={"action": action, "caller": identity or "anonymous"},
            )
            raise UnauthorizedAccess(detail=f"{action} requires the store authority")


class SingleAuthorityPolicy(AuthorizationPolicy):
    """Only the identity recorded as ``config.authority`` is allowed."""

    def is_authorized(self, caller: str | None, config: ConfigStore, action: ControlAction) -> bool:
        identity = normalise_identity(caller)
        if identity is None:
            return False
        # compare_digest only accepts ASCII str, so compare the UTF-8 bytes
        return secrets.compare_digest(
            identity.encode("utf-8"), str(config.authority).encode("utf-8")
        )


__all__ = ["AuthorizationPolicy", "ControlAction", "SingleAuthorityPolicy", "normalise_identity"]
