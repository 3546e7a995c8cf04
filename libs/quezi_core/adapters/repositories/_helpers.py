from __future__ import annotations

import uuid
from typing import Any

from quezi_core.core.application.cqrs import PagedResult

# campos geridos pelo ORM (auto_now / auto_now_add)
AUTO_FIELDS = ("id", "created_at", "updated_at", "joined_at")


def as_uuid(value: Any) -> uuid.UUID | None:
    """Converte para UUID; valores inválidos viram None (tratados como inexistentes)."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


def model_defaults(entity, extra_exclude: tuple[str, ...] = ()) -> dict[str, Any]:
    data = entity.to_dict()
    for key in (*AUTO_FIELDS, *extra_exclude):
        data.pop(key, None)
    return data


def paginate(qs, entity_cls, page: int, page_size: int, build=None) -> PagedResult:
    """`build` recebe as linhas da página quando o item não é a própria entidade (modelos de leitura)."""
    total = qs.count()
    offset = (page - 1) * page_size
    rows = list(qs[offset:offset + page_size])
    items = build(rows) if build else [entity_cls.from_model(m) for m in rows]
    return PagedResult(items=items, total=total, page=page, page_size=page_size)
