"""Corridor weight store interface, backends and factory.

The whole table is one JSON object ``{name: {"multiplier": m, "dataPoints": n}}``,
read in full at startup and written in full after each training update.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from routecast.config.settings import EngineSettings, load_settings
from routecast.domain.models import CorridorWeight

_logger = logging.getLogger("routecast.weights")


class WeightStore(Protocol):
    backend: str

    def get(self, name: str) -> Optional[CorridorWeight]: ...

    def set(self, name: str, weight: CorridorWeight) -> None: ...

    def all(self) -> dict[str, CorridorWeight]: ...

    def persist(self) -> None: ...


class InMemoryWeightStore:
    backend = "memory"

    def __init__(self, initial: Optional[dict[str, CorridorWeight]] = None) -> None:
        self._table: dict[str, CorridorWeight] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, name: str) -> Optional[CorridorWeight]:
        with self._lock:
            return self._table.get(name)

    def set(self, name: str, weight: CorridorWeight) -> None:
        with self._lock:
            self._table[name] = weight

    def all(self) -> dict[str, CorridorWeight]:
        with self._lock:
            return dict(self._table)

    def persist(self) -> None:
        return None


def _decode_table(raw: str) -> dict[str, CorridorWeight]:
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("weight blob must be a JSON object")
    return {str(name): CorridorWeight.model_validate(entry) for name, entry in data.items()}


class JsonFileWeightStore(InMemoryWeightStore):
    backend = "json"

    def __init__(self, path: Path) -> None:
        super().__init__(self._load(path))
        self._path = path

    @staticmethod
    def _load(path: Path) -> dict[str, CorridorWeight]:
        if not path.exists():
            return {}
        try:
            table = _decode_table(path.read_text(encoding="utf-8"))
        except (OSError, ValueError, ValidationError) as exc:
            _logger.warning("ignoring unreadable corridor weights at %s: %s", path, exc)
            return {}
        _logger.info("loaded %d corridor weight(s) from %s", len(table), path)
        return table

    def persist(self) -> None:
        payload = {
            name: weight.model_dump(by_alias=True) for name, weight in sorted(self.all().items())
        }
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            # In-memory table stays authoritative for this process.
            _logger.warning("failed to persist corridor weights to %s: %s", self._path, exc)


def get_weight_store(settings: Optional[EngineSettings] = None) -> WeightStore:
    settings = settings or load_settings()
    if not settings.weights_enabled:
        return InMemoryWeightStore()
    return JsonFileWeightStore(settings.weights_path)


__all__ = [
    "WeightStore",
    "InMemoryWeightStore",
    "JsonFileWeightStore",
    "get_weight_store",
]
