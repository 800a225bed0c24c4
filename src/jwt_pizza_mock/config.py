"""Settings for the mock API layer.

Values come from the environment first, then `.env`, then `.env.defaults`
(repository root or current directory), then the built-in defaults below.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict

BUILTIN_DEFAULTS: Dict[str, str] = {
    "MOCK_API_HOST": "127.0.0.1",
    "MOCK_API_PORT": "5555",
    "MOCK_API_LOG_LEVEL": "INFO",
}


@lru_cache(maxsize=1)
def load_defaults() -> Dict[str, str]:
    """Merge `.env.defaults` files, then overlay `.env` files."""
    dirs: list[Path] = [Path(__file__).resolve().parent.parent.parent]
    try:
        cwd = Path.cwd()
        if cwd.resolve() != dirs[0].resolve():
            dirs.append(cwd)
    except (OSError, FileNotFoundError):
        pass

    merged: Dict[str, str] = {}
    for name in (".env.defaults", ".env"):
        for directory in dirs:
            path = directory / name
            if path.exists():
                merged.update(_parse_env_file(path))
    return merged


def _parse_env_file(env_path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    with env_path.open("r", encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            value = value.strip()
            if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
                value = value[1:-1]
            values[key.strip()] = value
    return values


def get_setting(key: str) -> str:
    value = os.getenv(key)
    if value:
        return value
    value = load_defaults().get(key)
    if value:
        return value
    if key not in BUILTIN_DEFAULTS:
        raise RuntimeError(f"Unknown setting '{key}'")
    return BUILTIN_DEFAULTS[key]


@dataclass(frozen=True)
class MockApiSettings:
    host: str
    port: int
    log_level: str

    @classmethod
    def from_env(cls) -> "MockApiSettings":
        port = get_setting("MOCK_API_PORT")
        try:
            port_number = int(port)
        except ValueError:
            raise RuntimeError(f"MOCK_API_PORT must be an integer, got '{port}'") from None
        return cls(
            host=get_setting("MOCK_API_HOST"),
            port=port_number,
            log_level=get_setting("MOCK_API_LOG_LEVEL").upper(),
        )
