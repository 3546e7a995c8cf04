from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

from quezi_core.core.application.cqrs import PagedResult
from quezi_core.core.application.services.pagination_state import PaginationState

logger = structlog.get_logger(__name__)

FetchPage = Callable[[int, int], PagedResult[Any]]


class InfiniteLoader:
    """
    Carregamento incremental ("scroll infinito") sobre um fetch paginado.

    `fetch_page(page, limit)` devolve um `PagedResult`; o total reportado
    alimenta o `PaginationState`. `load_more()` só busca quando habilitado,
    sem outra carga em andamento e com mais itens a buscar. Falhas do fetch
    ficam em `error` e no log; a lista já carregada é preservada.
    """

    def __init__(self, fetch_page: FetchPage, page_size: int = 10, enabled: bool = True) -> None:
        self._fetch_page = fetch_page
        self.pagination = PaginationState(initial_page=1, initial_page_size=page_size)
        self.enabled = enabled
        self.items: list[Any] = []
        self.is_loading = False
        self.error: Exception | None = None
        self._next_page = 1
        self._exhausted = False

    @property
    def has_more(self) -> bool:
        return not self._exhausted

    def load_more(self) -> list[Any]:
        """Carrega a próxima página e devolve apenas os itens novos."""
        if not self.enabled or self.is_loading or self._exhausted:
            return []

        self.is_loading = True
        self.error = None
        page, limit = self._next_page, self.pagination.page_size
        try:
            result = self._fetch_page(page, limit)
        except Exception as exc:
            self.error = exc
            logger.error("infinite_loader.fetch_failed", page=page, limit=limit, error=str(exc))
            return []
        finally:
            self.is_loading = False

        new_items = list(result.items)
        self.items.extend(new_items)
        self.pagination.set_total_items(result.total)
        self.pagination.go_to_page(page)
        self._next_page = page + 1
        self._exhausted = not new_items or len(self.items) >= result.total
        logger.debug("infinite_loader.page_loaded", page=page, loaded=len(self.items), total=result.total)
        return new_items

    def reset(self) -> None:
        self.items = []
        self.error = None
        self.is_loading = False
        self._next_page = 1
        self._exhausted = False
        self.pagination.reset()
