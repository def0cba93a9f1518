"""Per-plugin key-value persistence."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator, Mapping, MutableMapping

from .settings import _SETTINGS_DIR

__all__ = ["PluginStorage"]

LOGGER = logging.getLogger(__name__)
_STORAGE_VERSION = 1


def _default_storage_dir() -> Path:
    return _SETTINGS_DIR / "storage"


class PluginStorage(MutableMapping[str, Any]):
    """JSON-backed string-keyed store scoped to one plugin.

    Values must be JSON serializable. Every assignment or deletion is written
    through to disk atomically; the file is read once, on first access.
    """

    def __init__(self, name: str, base_dir: Path | str | None = None) -> None:
        if not name or "/" in name or "\\" in name:
            raise ValueError(f"Invalid storage name: {name!r}")
        self._name = name
        root = Path(base_dir).expanduser() if base_dir else _default_storage_dir()
        self._path = root / f"{name}.json"
        self._data: dict[str, Any] | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> Path:
        return self._path

    def __getitem__(self, key: str) -> Any:
        return self._load()[key]

    def __setitem__(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)
        LOGGER.debug("PluginStorage[%s]: set %s", self._name, key)

    def __delitem__(self, key: str) -> None:
        data = self._load()
        del data[key]
        self._save(data)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._load()))

    def __len__(self) -> int:
        return len(self._load())

    def reload(self) -> None:
        """Drop the in-memory copy so the next access re-reads the file."""

        self._data = None

    def _load(self) -> dict[str, Any]:
        if self._data is None:
            self._data = self._read_payload()
        return self._data

    def _save(self, data: Mapping[str, Any]) -> Path:
        payload = {"version": _STORAGE_VERSION, "values": dict(data)}
        body = json.dumps(payload, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(body, encoding="utf-8")
        tmp_path.replace(self._path)
        return self._path

    def _read_payload(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
            data = json.loads(text)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as exc:
            LOGGER.warning("Plugin storage %s is not valid JSON: %s", self._path, exc)
            return {}
        values = data.get("values") if isinstance(data, Mapping) else None
        if not isinstance(values, Mapping):
            return {}
        return {str(key): value for key, value in values.items()}
