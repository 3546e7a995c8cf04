from __future__ import annotations

from collections.abc import Callable
from typing import Any

import requests
import structlog
from decouple import config

from quezi_core.adapters.api_clients.base_api_client import BaseAPIClient
from quezi_core.adapters.api_clients.results import APIResult, Failure, Success, Unauthorized
from quezi_core.adapters.context.session_context import SessionContext
from quezi_core.core.application.cqrs import PagedResult

logger = structlog.get_logger(__name__)


class QueziAPIClient(BaseAPIClient):
    """
    Cliente de alto nível da API Quezi.

    Injeta `Authorization: Bearer <token>` a partir do `SessionContext`
    (quando houver) e converte cada resposta em `Success`, `Unauthorized`
    ou `Failure`. Nenhum método levanta exceção por status HTTP ou falha
    de rede.
    """

    # ---------------------------------------------------------------- init ----------
    def __init__(
        self,
        *,
        base_url: str,
        session: SessionContext | None = None,
        timeout: float = 5.0,
        retries: int = 3,
    ) -> None:
        super().__init__(
            base_url=base_url,
            default_headers={"Accept": "application/json", "Content-Type": "application/json"},
            timeout=timeout,
            retries=retries,
        )
        self.auth = session

    @classmethod
    def from_env(cls, session: SessionContext | None = None) -> QueziAPIClient:
        return cls(
            base_url=config("QUEZI_API_URL", default="http://localhost:8000/api/"),
            session=session,
            timeout=config("QUEZI_API_TIMEOUT", default=5.0, cast=float),
        )

    # ---------------------------------------------------------------- core ----------
    def _auth_headers(self) -> dict[str, str]:
        if self.auth is not None and self.auth.token:
            return {"Authorization": f"Bearer {self.auth.token}"}
        return {}

    def call(
        self,
        method: str,
        path: str,
        *,
        path_params: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> APIResult[Any]:
        try:
            resp = self._request(
                method,
                path,
                path_params=path_params,
                params=params,
                json=json,
                headers=self._auth_headers(),
            )
        except requests.RequestException as exc:
            return Failure(status_code=0, message=str(exc), error="NetworkError")
        return self._to_result(resp)

    @staticmethod
    def _body(resp: requests.Response) -> Any:
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return resp.text

    def _to_result(self, resp: requests.Response) -> APIResult[Any]:
        body = self._body(resp)
        if resp.status_code == 401:
            message = body.get("message") if isinstance(body, dict) else None
            logger.info("api.unauthorized", url=resp.url)
            return Unauthorized(message=message or "Não autenticado")
        if resp.status_code >= 400:
            if isinstance(body, dict):
                return Failure(
                    status_code=resp.status_code,
                    message=body.get("message") or resp.reason or "Erro",
                    error=body.get("error"),
                    details=body.get("details") or [],
                )
            return Failure(status_code=resp.status_code, message=resp.reason or str(body))
        return Success(data=body, status_code=resp.status_code)

    @staticmethod
    def _paged(result: APIResult[Any]) -> APIResult[PagedResult[dict]]:
        if not isinstance(result, Success):
            return result
        data = result.data
        return Success(
            data=PagedResult(
                items=data["results"],
                total=data["total_items"],
                page=data["page"],
                page_size=data["page_size"],
            ),
            status_code=result.status_code,
        )

    def page_fetcher(
        self, list_method: Callable[..., APIResult[PagedResult[dict]]], **filters: Any
    ) -> Callable[[int, int], PagedResult[dict]]:
        """
        Adapta um método de listagem ao contrato `fetch_page(page, limit)`
        do InfiniteLoader. Resultados não-Success viram `APIResultError`.
        """
        def fetch(page: int, limit: int) -> PagedResult[dict]:
            return list_method(page=page, limit=limit, **filters).unwrap()
        return fetch

    @staticmethod
    def _clean(params: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in params.items() if v is not None}

    # ---------------------------------------------------------------- auth ----------
    def login(self, email: str, password: str) -> APIResult[dict]:
        result = self.call("POST", "auth/login/", json={"email": email, "password": password})
        if isinstance(result, Success) and self.auth is not None:
            self.auth.start(result.data["token"], result.data.get("user"))
        return result

    def register(self, **payload: Any) -> APIResult[dict]:
        return self.call("POST", "auth/register/", json=payload)

    def me(self) -> APIResult[dict]:
        return self.call("GET", "auth/me/")

    def logout(self) -> APIResult[Any]:
        result = self.call("POST", "auth/logout/")
        if self.auth is not None:
            self.auth.clear()
        return result

    def forgot_password(self, email: str) -> APIResult[dict]:
        return self.call("POST", "auth/forgot-password/", json={"email": email})

    def verify_reset_token(self, token: str) -> APIResult[dict]:
        return self.call("POST", "auth/verify-reset-token/", json={"token": token})

    def reset_password(self, token: str, password: str, confirm_password: str) -> APIResult[dict]:
        return self.call(
            "POST",
            "auth/reset-password/",
            json={"token": token, "password": password, "confirm_password": confirm_password},
        )

    # ---------------------------------------------------------------- organizations -
    def list_organizations(
        self, page: int = 1, limit: int = 10, search: str | None = None, mine: bool = False
    ) -> APIResult[PagedResult[dict]]:
        params = self._clean({"page": page, "limit": limit, "search": search, "mine": "true" if mine else None})
        return self._paged(self.call("GET", "organizations/", params=params))

    def get_organization(self, organization_id: str) -> APIResult[dict]:
        return self.call("GET", "organizations/{id}/", path_params={"id": organization_id})

    def get_organization_by_slug(self, slug: str) -> APIResult[dict]:
        return self.call("GET", "organizations/slug/{slug}/", path_params={"slug": slug})

    def create_organization(self, **payload: Any) -> APIResult[dict]:
        return self.call("POST", "organizations/", json=payload)

    # ---------------------------------------------------------------- professionals -
    def list_professionals(
        self,
        page: int = 1,
        limit: int = 10,
        city: str | None = None,
        service_mode: str | None = None,
        specialty: str | None = None,
        min_rating: float | None = None,
        sort_by: str | None = None,
    ) -> APIResult[PagedResult[dict]]:
        params = self._clean(
            {
                "page": page,
                "limit": limit,
                "city": city,
                "service_mode": service_mode,
                "specialty": specialty,
                "min_rating": min_rating,
                "sort_by": sort_by,
            }
        )
        return self._paged(self.call("GET", "professionals/", params=params))

    def search_professionals(
        self, query: str, page: int = 1, limit: int = 10, city: str | None = None
    ) -> APIResult[PagedResult[dict]]:
        params = self._clean({"query": query, "page": page, "limit": limit, "city": city})
        return self._paged(self.call("GET", "professionals/search/", params=params))

    def top_rated_professionals(self, limit: int = 10) -> APIResult[list[dict]]:
        return self.call("GET", "professionals/top-rated/", params={"limit": limit})

    def get_professional(self, user_id: str) -> APIResult[dict]:
        return self.call("GET", "professionals/{id}/", path_params={"id": user_id})

    def my_professional_profile(self) -> APIResult[dict]:
        return self.call("GET", "professionals/me/")

    # ---------------------------------------------------------------- catalog -------
    def list_services(
        self,
        page: int = 1,
        limit: int = 10,
        category_id: str | None = None,
        professional_id: str | None = None,
        search: str | None = None,
    ) -> APIResult[PagedResult[dict]]:
        params = self._clean(
            {
                "page": page,
                "limit": limit,
                "category_id": category_id,
                "professional_id": professional_id,
                "search": search,
            }
        )
        return self._paged(self.call("GET", "services/", params=params))

    def popular_services(self, limit: int = 10) -> APIResult[list[dict]]:
        return self.call("GET", "services/popular/", params={"limit": limit})

    def create_service(self, **payload: Any) -> APIResult[dict]:
        return self.call("POST", "services/", json=payload)

    def list_categories(
        self, page: int = 1, limit: int = 10, search: str | None = None
    ) -> APIResult[PagedResult[dict]]:
        params = self._clean({"page": page, "limit": limit, "search": search})
        return self._paged(self.call("GET", "categories/", params=params))

    # ---------------------------------------------------------------- appointments --
    def list_appointments(
        self, page: int = 1, limit: int = 10, status: str | None = None
    ) -> APIResult[PagedResult[dict]]:
        params = self._clean({"page": page, "limit": limit, "status": status})
        return self._paged(self.call("GET", "appointments/", params=params))

    # ---------------------------------------------------------------- reviews -------
    def list_reviews(
        self,
        page: int = 1,
        limit: int = 10,
        professional_id: str | None = None,
        min_rating: int | None = None,
        max_rating: int | None = None,
    ) -> APIResult[PagedResult[dict]]:
        params = self._clean(
            {
                "page": page,
                "limit": limit,
                "professional_id": professional_id,
                "min_rating": min_rating,
                "max_rating": max_rating,
            }
        )
        return self._paged(self.call("GET", "reviews/", params=params))

    def create_review(self, appointment_id: str, rating: int, comment: str | None = None) -> APIResult[dict]:
        return self.call(
            "POST",
            "reviews/",
            json=self._clean({"appointment_id": appointment_id, "rating": rating, "comment": comment}),
        )

    def professional_review_stats(self, professional_id: str) -> APIResult[dict]:
        return self.call(
            "GET", "reviews/professional/{id}/stats/", path_params={"id": professional_id}
        )
