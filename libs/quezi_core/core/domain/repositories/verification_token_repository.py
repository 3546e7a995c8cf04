from abc import ABC, abstractmethod

from quezi_core.core.domain.entities.verification_token_entity import VerificationTokenEntity


class VerificationTokenRepository(ABC):
    @abstractmethod
    def find(self, token: str, purpose: str) -> VerificationTokenEntity | None:
        """Busca o token pelo valor e finalidade."""
        ...

    @abstractmethod
    def save(self, entity: VerificationTokenEntity) -> VerificationTokenEntity:
        ...

    @abstractmethod
    def delete(self, token_id) -> None:
        ...

    @abstractmethod
    def delete_for_identifier(self, identifier: str, purpose: str) -> int:
        """Remove tokens anteriores do mesmo destinatário; devolve quantos."""
        ...
