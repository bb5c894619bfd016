"""Model import orchestration.

Runs classify -> build -> send -> interpret for one input. Printing stays in
the UI layer: the pipeline hands the finished report to `PipelineHooks`
callbacks and raises typed errors for everything else.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from core.domain.models import (
    CsvImportRequest,
    FileImportRequest,
    IngestionMode,
    InputDescriptor,
    RegistryResponse,
    UrlImportRequest,
)
from core.domain.report import ImportReport
from core.interfaces.transport import RegistryTransport
from core.services.input_classifier import classify_input
from core.services.payload_builder import build_request
from core.services.response_classifier import (
    build_report,
    ensure_models_registered,
    parse_response,
)

logger = logging.getLogger(__name__)


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers."""

    report: Callable[[ImportReport], None] | None = None
    info: Callable[[str], None] | None = None


@dataclass
class ImportResult:
    descriptor: InputDescriptor
    request: FileImportRequest | CsvImportRequest | UrlImportRequest
    response: RegistryResponse
    report: ImportReport


def import_model(
    source: str,
    *,
    transport: RegistryTransport,
    register: bool = True,
    registry_home: Path | None = None,
    hooks: PipelineHooks | None = None,
) -> ImportResult:
    hooks = hooks or PipelineHooks()

    descriptor = classify_input(source)
    request = build_request(descriptor, register=register)
    logger.debug("Sending %s import for %s", request.mode.value, source)

    raw = transport.register(request)
    response = parse_response(raw)
    report = build_report(response)

    # Hooks see the report even when no model was registered.
    if hooks.report:
        hooks.report(report)
    ensure_models_registered(response)

    if descriptor.mode is IngestionMode.CSV and registry_home is not None and hooks.info:
        hooks.info(f"Model can be accessed from {registry_home / 'models'}")
        hooks.info(f"Logs for the csv generation can be accessed {registry_home / 'logs' / 'registry'}")

    return ImportResult(descriptor=descriptor, request=request, response=response, report=report)
