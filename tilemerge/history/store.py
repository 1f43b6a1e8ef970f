"""
Key-value stores persisting the score history.

The ledger only needs ``get`` and ``set`` on string keys, the contract of browser ``localStorage``. Writes are
synchronous: once ``set`` returns, a following ``get`` sees the new value.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal string key-value store."""

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None."""

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""


class MemoryStore:
    """
    Store keeping values in a dictionary.

    Parameters
    ----------
    initial : dict[str, str], optional
        Values to start with, copied.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._values


class JsonFileStore:
    """
    Store keeping every key in one JSON object file.

    The file maps each key to its string value. A missing file is an empty store. A file that cannot be read or
    decoded is also treated as empty, and is overwritten by the next ``set``.

    Parameters
    ----------
    path : str or Path
        Location of the JSON file. Parent directories are created on the first write.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, ValueError, RecursionError):
            _logger.warning('Unreadable score store %s, treating it as empty', self.path, exc_info=True)
            return {}

        if not isinstance(data, dict):
            _logger.warning('Score store %s does not hold a JSON object, treating it as empty', self.path)
            return {}
        return {key: value for key, value in data.items() if isinstance(value, str)}

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value

        # ##: Write a sibling file then swap it in, the store file is never left half written.
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + '.tmp')
        tmp_path.write_text(json.dumps(data), encoding='utf-8')
        tmp_path.replace(self.path)
