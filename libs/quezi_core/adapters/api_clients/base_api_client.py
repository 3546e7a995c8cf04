from __future__ import annotations

from typing import Any
from urllib.parse import urljoin

import requests
import structlog
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


class BaseAPIClient:
    """
    Utilitário HTTP simples com:
      • retry exponencial em falhas 5xx (apenas métodos idempotentes)
      • timeout configurável
      • headers extras por requisição (ex.: Authorization)
    """

    def __init__(
        self,
        *,
        base_url: str,
        default_headers: dict[str, str] | None = None,
        timeout: float = 5.0,
        retries: int = 3,
    ) -> None:
        self.log = structlog.get_logger(__name__).bind(component=type(self).__name__)
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout

        self.log.debug("Configurando cliente", base_url=self.base_url, timeout=timeout)

        # sessão + retry -----------------------------------------------------------------
        self.session = requests.Session()
        if default_headers:
            self.session.headers.update(default_headers)

        retry_cfg = Retry(
            total=retries,
            backoff_factor=0.3,
            status_forcelist=[500, 502, 503, 504],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_cfg)
        for scheme in ("https://", "http://"):
            self.session.mount(scheme, adapter)

    # ---------------------------------------------------------------------- utils -----
    def build_url(self, path: str, **path_params: Any) -> str:
        """`path` pode conter chaves .format() – ex.: 'organizations/{id}/'."""
        return urljoin(self.base_url, path.format(**path_params).lstrip("/"))

    # ---------------------------------------------------------------------- HTTP ------
    def _request(
        self,
        method: str,
        path: str,
        *,
        path_params: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        url = self.build_url(path, **(path_params or {}))
        log = self.log.bind(method=method, url=url, params=params)
        log.debug("Enviando requisição")

        try:
            resp = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            log.error("Falha de rede", error=str(exc))
            raise

        log.debug("Resposta recebida", status_code=resp.status_code)
        return resp
