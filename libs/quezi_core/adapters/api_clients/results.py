"""
Resultados do QueziAPIClient.

Toda chamada devolve exatamente uma das variantes abaixo; 401 vira
`Unauthorized` em vez de exceção, e quem chama decide o que fazer
(normalmente `SessionContext.clear()`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class APIResultError(Exception):
    """Levantada por `unwrap()` quando o resultado não é `Success`."""

    def __init__(self, result: Unauthorized | Failure) -> None:
        super().__init__(result.message)
        self.result = result


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T
    status_code: int = 200

    ok = True

    def unwrap(self) -> T:
        return self.data


@dataclass(frozen=True)
class Unauthorized:
    message: str = "Não autenticado"
    status_code: int = 401

    ok = False

    def unwrap(self):
        raise APIResultError(self)


@dataclass(frozen=True)
class Failure:
    """Erro HTTP (≠ 401) ou de rede (`status_code == 0`)."""
    status_code: int
    message: str
    error: str | None = None
    details: list[dict[str, Any]] = field(default_factory=list)

    ok = False

    def unwrap(self):
        raise APIResultError(self)


APIResult = Success[T] | Unauthorized | Failure
