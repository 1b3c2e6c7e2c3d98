"""
Process-wide environment settings.

Values are merged from, in increasing priority:
1) `env.example` (committed, safe placeholders)
2) `env.local` (optional, MUST NOT be committed)
3) System environment variables

Provider credentials (MUX_TOKEN_ID / MUX_TOKEN_SECRET) belong in `env.local`
or the process environment, never in `env.example`.
"""

import os
from pathlib import Path

from dotenv import dotenv_values
from loguru import logger

PROJECT_ROOT = Path(__file__).parent.parent.parent
ENV_FILES = ("env.example", "env.local")


def read_env_layers(root: Path = PROJECT_ROOT) -> dict[str, str | None]:
    """Merge the env files found under ``root`` with ``os.environ``, later layers winning."""
    merged: dict[str, str | None] = {}
    for name in ENV_FILES:
        path = root / name
        if not path.exists():
            continue
        merged.update(dotenv_values(path))
        logger.info("Loaded environment variables from {}", path)
    merged.update(os.environ)
    return merged


class EnvironConfig:
    """Singleton holding the merged env layers, read once per process."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._values = read_env_layers()
            cls._instance = instance
        return cls._instance

    def get(self, key: str, default: str | None = None) -> str | None:
        value = self._values.get(key)
        return default if value is None else value


config = EnvironConfig()
