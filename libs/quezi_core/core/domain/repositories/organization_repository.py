from __future__ import annotations

from abc import ABC, abstractmethod

from quezi_core.core.application.cqrs import PagedResult
from quezi_core.core.domain.entities.organization_entity import OrganizationEntity
from quezi_core.core.domain.entities.organization_member_entity import (
    OrganizationInviteEntity,
    OrganizationMemberEntity,
)


class OrganizationRepository(ABC):
    @abstractmethod
    def find_by_id(self, organization_id) -> OrganizationEntity | None:
        ...

    @abstractmethod
    def find_by_slug(self, slug: str) -> OrganizationEntity | None:
        ...

    @abstractmethod
    def save(self, organization: OrganizationEntity) -> OrganizationEntity:
        """Cria ou atualiza uma organização."""
        ...

    @abstractmethod
    def delete(self, organization_id) -> None:
        """Remove a organização junto com membros e convites."""
        ...

    @abstractmethod
    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[OrganizationEntity]:
        """
        Lista organizações paginadas.

        - filtros: `search` (nome ou slug) e `member_id` (apenas as do usuário)
        """
        ...

    @abstractmethod
    def count(self) -> int:
        ...


class OrganizationMemberRepository(ABC):
    @abstractmethod
    def find_by_id(self, member_id) -> OrganizationMemberEntity | None:
        ...

    @abstractmethod
    def find(self, organization_id, user_id) -> OrganizationMemberEntity | None:
        """Vínculo do usuário com a organização, se existir."""
        ...

    @abstractmethod
    def list_by_organization(self, organization_id) -> list[OrganizationMemberEntity]:
        ...

    @abstractmethod
    def save(self, member: OrganizationMemberEntity) -> OrganizationMemberEntity:
        ...

    @abstractmethod
    def delete(self, member_id) -> None:
        ...


class OrganizationInviteRepository(ABC):
    @abstractmethod
    def find_by_id(self, invite_id) -> OrganizationInviteEntity | None:
        ...

    @abstractmethod
    def find_pending(self, organization_id, email: str) -> OrganizationInviteEntity | None:
        """Convite ainda não aceito para o e-mail na organização."""
        ...

    @abstractmethod
    def save(self, invite: OrganizationInviteEntity) -> OrganizationInviteEntity:
        ...
