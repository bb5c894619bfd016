"""Build the single upload request for an ingestion mode.

Pure functions: no I/O, `register` is passed through untouched.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from core.domain.errors import PayloadDecodeError
from core.domain.models import (
    CsvImportRequest,
    CsvTriplet,
    FileImportRequest,
    IngestionMode,
    InputDescriptor,
    UrlImportRequest,
)

CSV_DATA_URI_PREFIX = "data:text/csv;base64,"


def encode_csv_data_uri(data: bytes) -> str:
    """`data:text/csv;base64,<...>`; empty input still yields the prefix."""

    return CSV_DATA_URI_PREFIX + base64.b64encode(data).decode("ascii")


def decode_csv_data_uri(value: str) -> bytes:
    if not value.startswith(CSV_DATA_URI_PREFIX):
        raise ValueError(f"not a CSV data URI: {value[:40]!r}")
    try:
        return base64.b64decode(value[len(CSV_DATA_URI_PREFIX):], validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 payload: {exc}") from exc


def build_file_request(data: bytes, file_name: str, *, register: bool = True) -> FileImportRequest:
    return FileImportRequest(model_file=data, file_name=file_name, register_model=register)


def build_csv_request(
    csv: CsvTriplet,
    file_name: str = "model.csv",
    *,
    register: bool = True,
) -> CsvImportRequest:
    return CsvImportRequest(
        model_csv=encode_csv_data_uri(csv.model),
        component_csv=encode_csv_data_uri(csv.component),
        relationship_csv=encode_csv_data_uri(csv.relationship),
        file_name=file_name,
        register_model=register,
    )


def build_url_request(
    url: str,
    *,
    model_data: bytes | None = None,
    register: bool = True,
) -> UrlImportRequest:
    """URL import; optional `model_data` must be a JSON object or the whole call fails."""

    model: dict[str, Any] | None = None
    if model_data is not None:
        try:
            decoded = json.loads(model_data)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise PayloadDecodeError(f"Unable to decode model: {exc}") from exc
        if not isinstance(decoded, dict):
            raise PayloadDecodeError(
                f"Unable to decode model: expected a JSON object, got {type(decoded).__name__}"
            )
        model = decoded
    return UrlImportRequest(url=url, model=model, file_name="", register_model=register)


def build_request(
    descriptor: InputDescriptor,
    *,
    register: bool = True,
) -> FileImportRequest | CsvImportRequest | UrlImportRequest:
    if descriptor.mode is IngestionMode.CSV:
        if descriptor.csv is None:
            raise ValueError("CSV import requires the three CSV buffers")
        return build_csv_request(descriptor.csv, descriptor.file_name, register=register)
    if descriptor.mode is IngestionMode.FILE:
        if descriptor.data is None:
            raise ValueError("file import requires the artifact bytes")
        return build_file_request(descriptor.data, descriptor.file_name, register=register)
    return build_url_request(descriptor.source, model_data=descriptor.data, register=register)
