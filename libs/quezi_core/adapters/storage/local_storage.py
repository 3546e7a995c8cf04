from __future__ import annotations

import json
import os
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

_MISSING = object()


class LocalStorage:
    """
    Armazenamento chave/valor persistido em um arquivo JSON.

    Cada valor é serializado em JSON de forma independente, então uma entrada
    corrompida não invalida as demais: `get` devolve o default e registra um
    warning. Sem `path` o armazenamento vive só em memória.
    """

    def __init__(self, path: str | os.PathLike | None = None) -> None:
        self._path = Path(path) if path else None
        self._lock = threading.Lock()
        self._store: dict[str, str] = self._load()

    # ─── persistência ───────────────────────────────
    def _load(self) -> dict[str, str]:
        if self._path is None or not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("local_storage.unreadable_file", path=str(self._path), error=str(exc))
            return {}
        if not isinstance(data, dict):
            logger.warning("local_storage.unexpected_format", path=str(self._path))
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _flush(self) -> None:
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(self._store, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, self._path)

    # ─── API ────────────────────────────────────────
    def get(self, key: str, default: Any = None) -> Any:
        raw = self._store.get(key, _MISSING)
        if raw is _MISSING:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("local_storage.invalid_json", key=key)
            return default

    def get_raw(self, key: str) -> str | None:
        return self._store.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._store[key] = json.dumps(value, ensure_ascii=False)
            self._flush()

    def set_raw(self, key: str, raw: str) -> None:
        with self._lock:
            self._store[key] = raw
            self._flush()

    def remove(self, key: str) -> None:
        with self._lock:
            if self._store.pop(key, _MISSING) is not _MISSING:
                self._flush()

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._flush()

    def __contains__(self, key: str) -> bool:
        return key in self._store


class StoredValue:
    """
    Valor ligado a uma chave do `LocalStorage`, com default.

    `set` aceita o novo valor ou uma função `anterior -> novo`; `clear`
    remove a chave e volta ao default.
    """

    def __init__(self, storage: LocalStorage, key: str, default: Any = None) -> None:
        self._storage = storage
        self.key = key
        self.default = default
        self._value = storage.get(key, default)

    @property
    def value(self) -> Any:
        return self._value

    def set(self, value: Any | Callable[[Any], Any]) -> None:
        new_value = value(self._value) if callable(value) else value
        self._storage.set(self.key, new_value)
        self._value = new_value

    def clear(self) -> None:
        self._storage.remove(self.key)
        self._value = self.default
