"""Command line entry point: validate settings or run the HTTP shell."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Sequence

import yaml

from .config.loader import apply_env_overrides, load_yaml, public_settings, validate_payload
from .config.schema import AppSettings
from .util.env import load_env_file
from .util.logging import setup_logging

LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tradegate", description="Risk-gated trade authorization")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check-config", help="validate a settings file")
    check.add_argument("path", help="YAML settings file")
    check.add_argument(
        "--no-env", action="store_true", help="ignore TRADEGATE_* environment overrides"
    )

    serve = sub.add_parser("serve", help="run the HTTP API with uvicorn")
    serve.add_argument("--host", default="127.0.0.1", help="bind host for uvicorn")
    serve.add_argument("--port", type=int, default=8000, help="bind port for uvicorn")
    return parser


def check_config(path: str, *, use_env: bool = True) -> int:
    try:
        raw = load_yaml(path)
    except (OSError, TypeError, yaml.YAMLError) as exc:
        print(f"failed to read {path}: {exc}", file=sys.stderr)
        return 2
    payload = apply_env_overrides(raw) if use_env else raw
    errors = validate_payload(payload)
    if errors:
        for error in errors:
            print(f"CONFIG ERROR: {error}", file=sys.stderr)
        return 1
    settings = AppSettings.model_validate(payload)
    for warning in _warnings(settings):
        print(f"CONFIG WARNING: {warning}", file=sys.stderr)
    print(json.dumps(public_settings(settings), indent=2, sort_keys=True))
    return 0


def _warnings(settings: AppSettings) -> list[str]:
    warnings: list[str] = []
    if settings.auto_initialize and (settings.authority is None or settings.params is None):
        warnings.append("auto_initialize needs both authority and params")
    if settings.params is not None and settings.params.max_slippage > 5000:
        warnings.append("max_slippage above 50% - ensure this is intentional")
    if not settings.throttle.enabled:
        warnings.append("throttle disabled - executions are not rate limited")
    return warnings


def _serve(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run("tradegate.main:app", host=host, port=port)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    load_env_file()
    if args.command == "check-config":
        return check_config(args.path, use_env=not args.no_env)
    setup_logging()
    LOGGER.info("starting tradegate API", extra={"host": args.host, "port": args.port})
    return _serve(args.host, args.port)


__all__ = ["check_config", "main"]
