from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PageWindow:
    """Fatia `[start_index, end_index)` exibida na página atual."""
    start_index: int
    end_index: int

    def slice(self, items):
        return items[self.start_index:self.end_index]


class PaginationState:
    """
    Estado de paginação de uma listagem.

    Guarda página atual, tamanho de página e total de itens; todo o resto
    (total de páginas, navegação, janela) é derivado a cada leitura. Não busca
    dados: quem usa chama o fetch com `page`/`limit` e informa o total via
    `set_total_items`.

    Nenhuma operação levanta exceção. Navegação fora do intervalo é ignorada,
    total negativo vira 0 e tamanho de página não positivo é ignorado.
    """

    def __init__(self, initial_page: int = 1, initial_page_size: int = 10) -> None:
        self._initial_page = max(int(initial_page), 1)
        self._initial_page_size = max(int(initial_page_size), 1)
        self._current_page = self._initial_page
        self._page_size = self._initial_page_size
        self._total_items = 0

    def __repr__(self) -> str:
        return (
            f"<PaginationState page={self._current_page}/{self.total_pages} "
            f"size={self._page_size} total={self._total_items}>"
        )

    # ─── estado ─────────────────────────────────────
    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def total_items(self) -> int:
        return self._total_items

    # ─── derivados ──────────────────────────────────
    @property
    def total_pages(self) -> int:
        return math.ceil(self._total_items / self._page_size)

    @property
    def has_next_page(self) -> bool:
        return self._current_page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self._current_page > 1

    @property
    def start_index(self) -> int:
        return (self._current_page - 1) * self._page_size

    @property
    def end_index(self) -> int:
        """
        Limite exclusivo da janela, truncado no total de itens.

        Se a página atual está além de `total_pages` (página inicial > 1 antes
        do primeiro total, ou total reduzido depois de navegar), o resultado
        fica menor que `start_index` e a janela não seleciona nenhum item.
        A página atual não é corrigida aqui.
        """
        return min(self.start_index + self._page_size, self._total_items)

    @property
    def window(self) -> PageWindow:
        return PageWindow(self.start_index, self.end_index)

    def as_params(self) -> dict[str, int]:
        """Parâmetros para o fetch da página atual."""
        return {"page": self._current_page, "limit": self._page_size}

    # ─── transições ─────────────────────────────────
    def set_total_items(self, total: int) -> None:
        self._total_items = max(int(total), 0)

    def go_to_page(self, page: int) -> None:
        if 1 <= page <= self.total_pages:
            self._current_page = page

    def next_page(self) -> None:
        if self.has_next_page:
            self.go_to_page(self._current_page + 1)

    def previous_page(self) -> None:
        if self.has_previous_page:
            self.go_to_page(self._current_page - 1)

    def set_page_size(self, size: int) -> None:
        if size < 1:
            return
        self._page_size = int(size)
        self._current_page = 1

    def reset(self) -> None:
        self._current_page = self._initial_page
        self._page_size = self._initial_page_size
        self._total_items = 0
