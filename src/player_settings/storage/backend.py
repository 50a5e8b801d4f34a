"""Key-value backends that hold raw preference values."""

import base64
import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterator, Optional
import logging

logger = logging.getLogger(__name__)

# Marker used to keep bytes values apart from plain strings in JSON
_BYTES_TAG = "__bytes__"


class KeyValueBackend(ABC):
    """Abstract base class for preference backends.

    Values are primitives (str, int, bool), bytes, or lists of those.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any existing value."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove key. Removing an absent key does nothing."""
        pass

    @abstractmethod
    def keys(self) -> Iterator[str]:
        """Iterate over the stored keys."""
        pass

    def contains(self, key: str) -> bool:
        """Check whether a value is stored under key."""
        return key in set(self.keys())


class MemoryBackend(KeyValueBackend):
    """Backend that keeps values in a dict for the lifetime of the process."""

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._values: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> Iterator[str]:
        return iter(list(self._values))

    def contains(self, key: str) -> bool:
        return key in self._values


class JsonFileBackend(KeyValueBackend):
    """Backend persisted to a JSON file, written through on every change."""

    def __init__(self, path: Path):
        """Initialize the backend and load any existing file.

        Args:
            path: Location of the JSON file
        """
        self._path = Path(path)
        self._values: dict[str, Any] = self._load()

    @property
    def path(self) -> Path:
        """Get the backing file path."""
        return self._path

    def _load(self) -> dict[str, Any]:
        """Read the file, or start empty if it is missing or unreadable."""
        if not self._path.exists():
            logger.info(f"No preferences file at {self._path}, starting empty")
            return {}

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f, object_hook=_decode_bytes)
        except (json.JSONDecodeError, ValueError, TypeError, OSError) as e:
            logger.warning(f"Failed to load preferences, starting empty: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring preferences file with unexpected content: {self._path}")
            return {}

        logger.info(f"Preferences loaded from {self._path}")
        return data

    def _save(self) -> None:
        """Atomically replace the file with the current values."""
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(_encode_bytes(self._values), f, indent=2)
            os.replace(tmp_path, self._path)
            logger.debug(f"Preferences saved to {self._path}")
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save preferences: {e}")
        finally:
            if tmp_path.exists():
                tmp_path.unlink()

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value
        self._save()

    def remove(self, key: str) -> None:
        if key in self._values:
            del self._values[key]
            self._save()

    def keys(self) -> Iterator[str]:
        return iter(list(self._values))

    def contains(self, key: str) -> bool:
        return key in self._values


def _encode_bytes(value: Any) -> Any:
    """Replace bytes with tagged base64 objects, recursively."""
    if isinstance(value, bytes):
        return {_BYTES_TAG: base64.b64encode(value).decode("ascii")}
    if isinstance(value, list):
        return [_encode_bytes(v) for v in value]
    if isinstance(value, dict):
        return {k: _encode_bytes(v) for k, v in value.items()}
    return value


def _decode_bytes(obj: dict) -> Any:
    """JSON object hook turning tagged base64 objects back into bytes."""
    if len(obj) == 1 and _BYTES_TAG in obj:
        return base64.b64decode(obj[_BYTES_TAG])
    return obj
