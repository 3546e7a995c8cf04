from __future__ import annotations

from abc import ABC, abstractmethod

from quezi_core.core.application.cqrs import PagedResult
from quezi_core.core.domain.entities.user_entity import UserEntity


class UserRepository(ABC):
    @abstractmethod
    def find_by_id(self, user_id) -> UserEntity | None:
        """Retorna o usuário por ID."""
        ...

    @abstractmethod
    def find_by_email(self, email: str) -> UserEntity | None:
        """Retorna o usuário com o e-mail informado (sem diferenciar caixa), ou None."""
        ...

    @abstractmethod
    def exists_by_email(self, email: str) -> bool:
        ...

    @abstractmethod
    def save(self, entity: UserEntity) -> UserEntity:
        """Cria ou atualiza um usuário."""
        ...

    @abstractmethod
    def delete(self, user_id) -> None:
        """Remove um usuário."""
        ...

    @abstractmethod
    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[UserEntity]:
        """
        Lista usuários paginados.

        - filtros: `user_type`, `is_active` e `search` (nome ou e-mail)
        - page: número da página (1-based)
        - page_size: quantidade de itens por página
        """
        ...

    @abstractmethod
    def count_by_type(self) -> dict[str, int]:
        """Total de usuários agrupado por `user_type`."""
        ...
