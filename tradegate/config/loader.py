from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from ..errors import InvalidConfiguration
from .schema import AppSettings, GateParams

LOGGER = logging.getLogger(__name__)

CONFIG_PATH_ENV = "TRADEGATE_CONFIG"

# env var -> (section, key); ``None`` section means top level
_ENV_OVERRIDES: dict[str, tuple[str | None, str]] = {
    "TRADEGATE_AUTHORITY": (None, "authority"),
    "TRADEGATE_AUTO_INITIALIZE": (None, "auto_initialize"),
    "TRADEGATE_LOG_LEVEL": (None, "log_level"),
    "TRADEGATE_MAX_TRADE_AMOUNT": ("params", "max_trade_amount"),
    "TRADEGATE_MIN_LIQUIDITY": ("params", "min_liquidity"),
    "TRADEGATE_MAX_SLIPPAGE": ("params", "max_slippage"),
    "TRADEGATE_RISK_THRESHOLD": ("params", "risk_threshold"),
    "TRADEGATE_COOLDOWN_SEC": ("throttle", "cooldown_sec"),
    "TRADEGATE_MAX_DAILY_TRADES": ("throttle", "max_daily_trades"),
    "TRADEGATE_EXCHANGE_VENUE": ("exchange", "venue"),
    "TRADEGATE_EXCHANGE_TIMEOUT_SEC": ("exchange", "timeout_sec"),
    "TRADEGATE_JOURNAL_PATH": ("events", "journal_path"),
}

_REDACTED_TOKENS = ("key", "secret", "token", "password")


def load_yaml(path: Path | str) -> dict[str, Any]:
    cfg_path = Path(path)
    with cfg_path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, dict):
        raise TypeError(f"Configuration root must be a mapping, got {type(payload)!r}")
    return payload


def apply_env_overrides(
    payload: Mapping[str, Any], env: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Return a copy of ``payload`` with ``TRADEGATE_*`` variables applied."""

    source = os.environ if env is None else env
    merged: dict[str, Any] = {
        key: dict(value) if isinstance(value, Mapping) else value
        for key, value in payload.items()
    }
    for name, (section, key) in _ENV_OVERRIDES.items():
        raw = source.get(name)
        if raw is None or not raw.strip():
            continue
        value = raw.strip()
        if section is None:
            merged[key] = value
            continue
        bucket = merged.get(section)
        if not isinstance(bucket, dict):
            bucket = {}
            merged[section] = bucket
        bucket[key] = value
    return merged


def load_settings(
    path: Path | str | None = None, env: Mapping[str, str] | None = None
) -> AppSettings:
    """Load settings from YAML (optional) and the environment."""

    source = os.environ if env is None else env
    if path is None:
        path = source.get(CONFIG_PATH_ENV) or None
    raw: dict[str, Any] = {}
    if path is not None:
        raw = load_yaml(path)
        LOGGER.info("loaded settings file", extra={"path": str(path)})
    return AppSettings.model_validate(apply_env_overrides(raw, source))


def coerce_params(params: GateParams | Mapping[str, Any]) -> GateParams:
    """Validate ``params`` against the config store invariants.

    Always re-validates, so instances built with ``model_construct`` are
    checked too. Raises :class:`InvalidConfiguration` on failure.
    """

    payload = params.model_dump() if isinstance(params, GateParams) else dict(params)
    try:
        return GateParams.model_validate(payload)
    except ValidationError as exc:
        raise InvalidConfiguration(detail="; ".join(_format_errors(exc))) from exc


def _format_errors(exc: ValidationError) -> list[str]:
    errors: list[str] = []
    for entry in exc.errors():
        location = ".".join(str(part) for part in entry.get("loc", ()))
        message = str(entry.get("msg") or "invalid")
        errors.append(f"{location}: {message}" if location else message)
    return errors


def validate_payload(payload: Any) -> list[str]:
    """Return a list of validation errors for ``payload``.

    The function returns an empty list when the payload is valid.
    """

    try:
        AppSettings.model_validate(payload)
    except ValidationError as exc:
        return _format_errors(exc)
    return []


def _redact(value: Any) -> Any:
    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for key, inner in value.items():
            if any(token in str(key).lower() for token in _REDACTED_TOKENS):
                redacted[str(key)] = "***"
            else:
                redacted[str(key)] = _redact(inner)
        return redacted
    return value


def public_settings(settings: AppSettings) -> dict[str, Any]:
    """Serialisable settings view with sensitive keys masked."""

    return _redact(settings.model_dump(mode="json"))


__all__ = [
    "CONFIG_PATH_ENV",
    "apply_env_overrides",
    "coerce_params",
    "load_settings",
    "load_yaml",
    "public_settings",
    "validate_payload",
]
