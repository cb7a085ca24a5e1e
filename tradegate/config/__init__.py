"""Settings models and loaders."""

from .loader import (
    apply_env_overrides,
    coerce_params,
    load_settings,
    load_yaml,
    public_settings,
    validate_payload,
)
from .schema import AppSettings, EventsConfig, ExchangeConfig, GateParams, ThrottleConfig

__all__ = [
    "AppSettings",
    "EventsConfig",
    "ExchangeConfig",
    "GateParams",
    "ThrottleConfig",
    "apply_env_overrides",
    "coerce_params",
    "load_settings",
    "load_yaml",
    "public_settings",
    "validate_payload",
]
