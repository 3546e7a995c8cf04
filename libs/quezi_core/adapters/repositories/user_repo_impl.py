from __future__ import annotations

from django.db.models import Count, Q

from plugins.django_interface.models import User as UserModel
from quezi_core.adapters.repositories._helpers import as_uuid, model_defaults, paginate
from quezi_core.core.application.cqrs import PagedResult
from quezi_core.core.domain.entities.user_entity import UserEntity
from quezi_core.core.domain.repositories.user_repository import UserRepository


class UserRepoImpl(UserRepository):
    def find_by_id(self, user_id) -> UserEntity | None:
        uid = as_uuid(user_id)
        if uid is None:
            return None
        m = UserModel.objects.filter(id=uid).first()
        return UserEntity.from_model(m) if m else None

    def find_by_email(self, email: str) -> UserEntity | None:
        m = UserModel.objects.filter(email__iexact=email.strip()).first()
        return UserEntity.from_model(m) if m else None

    def exists_by_email(self, email: str) -> bool:
        return UserModel.objects.filter(email__iexact=email.strip()).exists()

    def save(self, entity: UserEntity) -> UserEntity:
        m, _ = UserModel.objects.update_or_create(
            id=entity.id,
            defaults=model_defaults(entity),
        )
        return UserEntity.from_model(m)

    def delete(self, user_id) -> None:
        uid = as_uuid(user_id)
        if uid is not None:
            UserModel.objects.filter(id=uid).delete()

    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[UserEntity]:
        filtros = dict(filtros)
        search = filtros.pop("search", None)
        qs = UserModel.objects.filter(**filtros)
        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(email__icontains=search))
        return paginate(qs.order_by("-created_at", "id"), UserEntity, page, page_size)

    def count_by_type(self) -> dict[str, int]:
        rows = UserModel.objects.values("user_type").annotate(total=Count("id"))
        counts = {t: 0 for t in UserModel.UserType.values}
        counts.update({r["user_type"]: r["total"] for r in rows})
        return counts
