"""Persistent key/value store for CLI settings (API key, access token)."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

API_KEY = "apiKey"
ACCESS_TOKEN = "accessToken"


class ConfigStoreError(Exception):
    """The settings file exists but cannot be used."""


class ConfigStore(Protocol):
    """What the API client needs from a settings backend."""

    def get(self, name: str) -> Optional[str]: ...

    def set(self, name: str, value: str) -> None: ...

    def has(self, name: str) -> bool: ...

    def is_configured(self) -> bool: ...


class MemoryConfigStore:
    """In-memory store, used by tests and when embedding the client."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, name: str) -> Optional[str]:
        return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        self._values[name] = value

    def has(self, name: str) -> bool:
        return name in self._values

    def is_configured(self) -> bool:
        return bool(self.get(API_KEY))

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)


class FileConfigStore:
    """Settings persisted as a JSON object on disk.

    The file is read on first access and rewritten on every ``set``.
    There is no locking: two processes writing at once means the last
    write wins.
    """

    FILENAME = "config.json"

    def __init__(self, path: Path):
        self.path = Path(path)
        self._values: Optional[dict[str, str]] = None

    @classmethod
    def in_directory(cls, directory: Path) -> "FileConfigStore":
        return cls(Path(directory) / cls.FILENAME)

    def _load(self) -> dict[str, str]:
        if self._values is not None:
            return self._values

        if not self.path.exists():
            self._values = {}
            return self._values

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as e:
            raise ConfigStoreError(f"Config file {self.path} is not valid JSON: {e}") from e
        except OSError as e:
            raise ConfigStoreError(f"Cannot read config file {self.path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigStoreError(f"Config file {self.path} must contain a JSON object")

        self._values = {str(k): str(v) for k, v in raw.items() if v is not None}
        logger.debug("Loaded %d setting(s) from %s", len(self._values), self.path)
        return self._values

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write next to the target so the replace stays on one filesystem
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".config-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(self._values, fh, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, name: str) -> Optional[str]:
        return self._load().get(name)

    def set(self, name: str, value: str) -> None:
        self._load()[name] = value
        self._flush()
        logger.debug("Saved setting %s to %s", name, self.path)

    def has(self, name: str) -> bool:
        return name in self._load()

    def is_configured(self) -> bool:
        return bool(self.get(API_KEY))

    def as_dict(self) -> dict[str, str]:
        return dict(self._load())


# Global store instance
_store: Optional[ConfigStore] = None


def get_store() -> ConfigStore:
    """Get or create the process-wide settings store."""
    global _store
    if _store is None:
        from ntropy_cli.core.config import get_config

        _store = FileConfigStore.in_directory(get_config().config_dir)
    return _store


def set_store(store: Optional[ConfigStore]) -> None:
    """Replace the process-wide settings store (``None`` resets it)."""
    global _store
    _store = store
