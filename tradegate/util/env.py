from __future__ import annotations

import os
from pathlib import Path


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value


def load_env_file(path: str | Path = ".env") -> list[str]:
    """Populate ``os.environ`` from ``KEY=value`` lines in ``path``.

    Variables already present in the environment win. Blank lines, ``#``
    comments and an ``export `` prefix are tolerated. Returns the keys that
    were newly set.
    """

    env_path = Path(path)
    if not env_path.is_file():
        return []
    loaded: list[str] = []
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        line = line.removeprefix("export ").strip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key or key in os.environ:
            continue
        os.environ[key] = _unquote(value.strip())
        loaded.append(key)
    return loaded
