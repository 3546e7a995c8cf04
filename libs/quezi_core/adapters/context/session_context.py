from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

from quezi_core.adapters.storage.local_storage import LocalStorage

logger = structlog.get_logger(__name__)

TOKEN_KEY = "quezi_token"
USER_KEY = "quezi_user"

SessionListener = Callable[["SessionContext"], None]


class SessionContext:
    """
    Estado de autenticação do cliente, passado explicitamente a quem precisa.

    Ciclo de vida:
      • `init()`  – ao carregar, restaura token/usuário persistidos
      • `start()` – após login/registro, guarda token e usuário
      • `clear()` – no logout ou quando a API responde Unauthorized
    """

    def __init__(self, storage: LocalStorage) -> None:
        self._storage = storage
        self._token: str | None = None
        self._user: dict[str, Any] | None = None
        self._listeners: list[SessionListener] = []
        self.initialized = False

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def user(self) -> dict[str, Any] | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def subscribe(self, listener: SessionListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            try:
                listener(self)
            except Exception as exc:  # noqa: BLE001
                logger.error("session.listener_failed", listener=repr(listener), error=str(exc))

    # ─── ciclo de vida ──────────────────────────────
    def init(self) -> None:
        token = self._storage.get(TOKEN_KEY)
        self._token = token if isinstance(token, str) and token else None
        user = self._storage.get(USER_KEY)
        self._user = user if self._token and isinstance(user, dict) else None
        self.initialized = True
        logger.debug("session.restored", authenticated=self.is_authenticated)
        self._notify()

    def start(self, token: str, user: dict[str, Any] | None = None) -> None:
        self._token = token
        self._user = user
        self._storage.set(TOKEN_KEY, token)
        if user is None:
            self._storage.remove(USER_KEY)
        else:
            self._storage.set(USER_KEY, user)
        logger.info("session.started", user_id=(user or {}).get("id"))
        self._notify()

    def clear(self) -> None:
        had_session = self.is_authenticated
        self._token = None
        self._user = None
        self._storage.remove(TOKEN_KEY)
        self._storage.remove(USER_KEY)
        if had_session:
            logger.info("session.cleared")
        self._notify()
