from plugins.django_interface.models import VerificationToken as TokenModel
from quezi_core.adapters.repositories._helpers import model_defaults
from quezi_core.core.domain.entities.verification_token_entity import VerificationTokenEntity
from quezi_core.core.domain.repositories.verification_token_repository import VerificationTokenRepository


class VerificationTokenRepoImpl(VerificationTokenRepository):
    def find(self, token: str, purpose: str) -> VerificationTokenEntity | None:
        m = TokenModel.objects.filter(token=token, purpose=purpose).first()
        return VerificationTokenEntity.from_model(m) if m else None

    def save(self, entity: VerificationTokenEntity) -> VerificationTokenEntity:
        m, _ = TokenModel.objects.update_or_create(
            id=entity.id,
            defaults=model_defaults(entity),
        )
        return VerificationTokenEntity.from_model(m)

    def delete(self, token_id) -> None:
        TokenModel.objects.filter(id=token_id).delete()

    def delete_for_identifier(self, identifier: str, purpose: str) -> int:
        deleted, _ = TokenModel.objects.filter(identifier__iexact=identifier, purpose=purpose).delete()
        return deleted
