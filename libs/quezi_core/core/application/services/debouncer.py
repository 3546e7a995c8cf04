from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_DELAY = 0.5  # segundos


class Debouncer:
    """
    Adia a chamada de `callback` até `delay` segundos sem novas chamadas.

    Cada `call()` reinicia o timer e substitui os argumentos pendentes; só a
    última chamada é executada. `flush()` executa a pendente imediatamente e
    `cancel()` descarta.
    """

    def __init__(self, callback: Callable[..., Any], delay: float = DEFAULT_DELAY) -> None:
        self.callback = callback
        self.delay = delay
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending: tuple[tuple, dict] | None = None

    def __call__(self, *args, **kwargs) -> None:
        self.call(*args, **kwargs)

    def call(self, *args, **kwargs) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (args, kwargs)
            self._timer = threading.Timer(self.delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None

    def flush(self) -> Any:
        """Executa já a chamada pendente (se houver) e devolve o resultado."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            pending, self._pending = self._pending, None
        if pending is None:
            return None
        args, kwargs = pending
        return self.callback(*args, **kwargs)

    def _fire(self) -> None:
        with self._lock:
            pending, self._pending = self._pending, None
            self._timer = None
        if pending is None:
            return
        args, kwargs = pending
        try:
            self.callback(*args, **kwargs)
        except Exception as exc:
            # roda em thread do Timer: não há chamador para propagar
            logger.error("debounce.callback_error", error=str(exc), exc_info=True)


class DebouncedValue:
    """
    Valor que só é "assentado" após `delay` segundos sem alterações.

    Útil para campos de busca: `set()` a cada tecla, `value` reflete o último
    valor estável e `on_settle` é notificado quando ele muda.
    """

    def __init__(self, initial: Any = None, delay: float = DEFAULT_DELAY,
                 on_settle: Callable[[Any], Any] | None = None) -> None:
        self._value = initial
        self._on_settle = on_settle
        self._debouncer = Debouncer(self._settle, delay)

    @property
    def value(self) -> Any:
        return self._value

    def set(self, value: Any) -> None:
        self._debouncer.call(value)

    def flush(self) -> Any:
        self._debouncer.flush()
        return self._value

    def cancel(self) -> None:
        self._debouncer.cancel()

    def _settle(self, value: Any) -> None:
        changed = value != self._value
        self._value = value
        if changed and self._on_settle is not None:
            self._on_settle(value)
