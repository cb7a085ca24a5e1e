"""Control plane operations and their authorization policies."""

from .authority import AuthorizationPolicy, ControlAction, SingleAuthorityPolicy
from .plane import ControlPlane

__all__ = ["AuthorizationPolicy", "ControlAction", "ControlPlane", "SingleAuthorityPolicy"]
