"""Key-value storage the client stores persist into.

A `Storage` only knows about strings, like a browser's local storage. The
module level helpers do the JSON on top and never raise: a failed read gives
back the default, a failed write is logged and dropped.
"""
import json
import logging
from pathlib import Path
from typing import Any, Protocol


logger = logging.getLogger(__name__)


class Storage(Protocol):
    def get_item(self, key: str) -> str | None:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class MemoryStorage:
    """Lives as long as the process. Also what session storage amounts to."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = {} if items is None else items

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileStorage:
    """All keys in one JSON object on disk, rewritten on every change."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self.path}.")
        return data

    def _write(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w") as f:
            json.dump(items, f)
        tmp.replace(self.path)

    def get_item(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if key in items:
            del items[key]
            self._write(items)


def get_item(storage: Storage, key: str, default: Any = None) -> Any:
    try:
        item = storage.get_item(key)
        return json.loads(item) if item else default
    except (OSError, ValueError, TypeError) as e:
        logger.error('Error reading storage key "%s": %r', key, e)
        return default


def set_item(storage: Storage, key: str, value: Any) -> None:
    try:
        storage.set_item(key, json.dumps(value))
    except (OSError, ValueError, TypeError) as e:
        logger.error('Error setting storage key "%s": %r', key, e)


def remove_item(storage: Storage, key: str) -> None:
    try:
        storage.remove_item(key)
    except (OSError, ValueError, TypeError) as e:
        logger.error('Error removing storage key "%s": %r', key, e)
