from __future__ import annotations

import math
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar

import structlog

from quezi_core.core.domain.events.events import DomainEvent
from quezi_core.core.domain.services.event_dispatcher import EventDispatcher

# ───────────────────────────────────────────────
# Comandos, consultas e barramentos da Quezi
# ───────────────────────────────────────────────

C = TypeVar('C')  # tipo do comando
Q = TypeVar('Q')  # tipo da consulta
R = TypeVar('R')  # tipo do resultado
T = TypeVar('T')  # item de PagedResult

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CommandDTO:
    """Base dos comandos de escrita."""


@dataclass(frozen=True)
class PaginatedQueryDTO(Generic[Q]):
    """Consulta paginada: filtros + página (1-based) + tamanho."""
    filtros: Q
    page: int = 1
    page_size: int = 10


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    items: Sequence[T]
    total: int
    page: int
    page_size: int
    total_pages: int = field(init=False)

    def __post_init__(self):
        pages = math.ceil(self.total / self.page_size) if self.page_size else 0
        object.__setattr__(self, 'total_pages', pages)

    def map(self, fn: Callable[[T], Any]) -> PagedResult[Any]:
        """Converte os itens mantendo os metadados de paginação."""
        return PagedResult(
            items=[fn(i) for i in self.items],
            total=self.total,
            page=self.page,
            page_size=self.page_size,
        )


class CommandHandler(Protocol, Generic[C]):
    def handle(self, command: C) -> Any:
        ...


class QueryHandler(Protocol, Generic[Q, R]):
    def handle(self, query: Q) -> R:
        ...


# ───────────────────────────────────────────────
# Barramentos
# ───────────────────────────────────────────────
class _Bus:
    """Roteia uma mensagem para o handler registrado para o seu tipo e mede a duração."""
    kind = "mensagem"

    def __init__(self) -> None:
        self._handlers: dict[type, Any] = {}

    def register(self, message_type: type, handler: Any) -> None:
        self._handlers[message_type] = handler
        logger.debug("bus.handler_registered", kind=self.kind, message=message_type.__name__)

    def dispatch(self, message: Any) -> Any:
        name = type(message).__name__
        handler = self._handlers.get(type(message))
        if handler is None:
            raise ValueError(f"Nenhum handler para {self.kind}: {name}")

        start = time.perf_counter()
        result = handler.handle(message)
        logger.info("bus.dispatched", kind=self.kind, message=name, duration=f"{time.perf_counter() - start:.3f}s")
        return result


class CommandBusImpl(_Bus):
    """
    Barramento de comandos que publica os eventos de domínio dos handlers.

    Um handler pode devolver um `DomainEvent`, uma tupla `(resultado, evento)`
    ou apenas o resultado; no caso da tupla somente o resultado volta ao chamador.
    """
    kind = "comando"

    def __init__(self, dispatcher: EventDispatcher):
        super().__init__()
        self.dispatcher = dispatcher

    def dispatch(self, command: Any) -> Any:
        result = super().dispatch(command)

        if isinstance(result, DomainEvent):
            self.dispatcher.dispatch(result)
        elif isinstance(result, tuple) and len(result) == 2 and isinstance(result[1], DomainEvent):
            result, event = result
            self.dispatcher.dispatch(event)

        return result


class QueryBusImpl(_Bus):
    kind = "query"


# ───────────────────────────────────────────────
# Quem executa a operação (para regras de acesso)
# ───────────────────────────────────────────────
@dataclass(frozen=True)
class Requester:
    id: Any
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "ADMIN"
