"""Wrapper de httpx para hablar con el registry.

- `build_client` estandariza timeout, headers y cookies de sesión.
- `RegistryClient` implementa `core.interfaces.transport.RegistryTransport`.

Se puede inyectar un `httpx.Client` propio (p.ej. con `httpx.MockTransport`).
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings
from core.domain.errors import RequestError
from core.domain.models import CsvImportRequest, FileImportRequest, UrlImportRequest

logger = logging.getLogger(__name__)


def build_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con los defaults de la aplicación."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }

    cookies: dict[str, str] = {}
    if settings.token:
        cookies["token"] = settings.token
    if settings.provider:
        cookies["meshery-provider"] = settings.provider

    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        cookies=cookies,
        transport=transport,
    )


class RegistryClient:
    """Envía peticiones de import al endpoint de registro."""

    def __init__(self, settings: AppSettings | None = None, client: httpx.Client | None = None) -> None:
        self._settings = settings or AppSettings()
        self._client = client

    @property
    def url(self) -> str:
        return self._settings.register_url

    def register(self, request: FileImportRequest | CsvImportRequest | UrlImportRequest) -> bytes:
        body = request.to_json()
        logger.debug("POST %s (%s, %d bytes)", self.url, request.mode.value, len(body))

        client = self._client or build_client(self._settings)
        try:
            response = client.post(
                self.url,
                content=body,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise RequestError(
                f"Failed to make {self.url} request: {exc}",
                method="POST",
                url=self.url,
            ) from exc
        finally:
            if self._client is None:
                client.close()

        if response.status_code != httpx.codes.OK:
            raise RequestError(
                f"Request POST {self.url} failed with status {response.status_code}",
                method="POST",
                url=self.url,
                status_code=response.status_code,
            )
        return response.content

    def ping(self) -> tuple[bool, str]:
        """Comprobación ligera de conectividad (para `doctor`)."""

        client = self._client or build_client(self._settings)
        try:
            response = client.get(self._settings.server_url)
            return True, f"HTTP {response.status_code}"
        except httpx.HTTPError as exc:
            return False, str(exc)
        finally:
            if self._client is None:
                client.close()
