"""Contrato del transporte hacia el registry.

El Core solo necesita "envía esta petición, dame los bytes de la respuesta";
timeouts, TLS y cookies son asunto del adaptador.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import CsvImportRequest, FileImportRequest, UrlImportRequest


@runtime_checkable
class RegistryTransport(Protocol):
    """Contrato mínimo del transporte.

    - Devuelve el cuerpo completo de una respuesta `200 OK`.
    - Cualquier otro status o fallo de red se eleva como `RequestError`.
    """

    def register(self, request: FileImportRequest | CsvImportRequest | UrlImportRequest) -> bytes:
        ...
