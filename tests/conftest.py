"""Shared fixtures for the modelctl test suite."""

from __future__ import annotations

import io
import json
from typing import Any, Callable

import pytest
from rich.console import Console

from core.domain.models import CsvImportRequest, FileImportRequest, UrlImportRequest

MODEL_CSV = "registrant,modelDisplayName,model,category\ngithub,Kubernetes,kubernetes,Orchestration\n"
COMPONENT_CSV = "model,component,shape\nkubernetes,Pod,circle\n"
RELATIONSHIP_CSV = "model,key,kind,type,subType\nkubernetes,k1,hierarchical,parent,inventory\n"


def registry_payload(
    *,
    model_names: list[str] | None = None,
    model_count: int = 1,
    comp_count: int = 0,
    rel_count: int = 0,
    total_err_count: int = 0,
    message: str = "Imported 1 model",
    successful_models: list[Any] | None = None,
    components: list[Any] | None = None,
    relationships: list[Any] | None = None,
    errors: list[Any] | None = None,
) -> dict[str, Any]:
    return {
        "model_name": model_names if model_names is not None else ["Kubernetes"],
        "entity_count": {
            "model_count": model_count,
            "comp_count": comp_count,
            "rel_count": rel_count,
            "total_err_count": total_err_count,
        },
        "err_msg": message,
        "entity_type_summary": {
            "successful_models": successful_models if successful_models is not None else ["Kubernetes"],
            "successful_components": components or [],
            "successful_relationships": relationships or [],
            "unsuccessful_entity_name_with_error": errors or [],
        },
    }


def relationship_record(
    model: str = "Kubernetes",
    *,
    kind: str = "hierarchical",
    subtype: str = "inventory",
    relationship_type: str = "parent",
    edges: list[tuple[str, str]] | None = None,
) -> dict[str, Any]:
    return {
        "Kind": kind,
        "Subtype": subtype,
        "RelationshipType": relationship_type,
        "Model": model,
        "Selectors": [
            {"allow": {"from": [{"kind": src}], "to": [{"kind": dst}]}}
            for src, dst in (edges or [("Namespace", "Pod")])
        ],
    }


def error_record(
    names: list[Any],
    entity_types: list[Any],
    *,
    long_description: Any = None,
    probable_cause: Any = None,
    remediation: Any = None,
) -> dict[str, Any]:
    if long_description is None:
        long_description = ["Component definition is invalid"]
    error: dict[str, Any] = {"LongDescription": long_description}
    if probable_cause is not None:
        error["ProbableCause"] = probable_cause
    if remediation is not None:
        error["SuggestedRemediation"] = remediation
    return {"name": names, "entityType": entity_types, "error": error}


@pytest.fixture
def payload_factory() -> Callable[..., dict[str, Any]]:
    return registry_payload


@pytest.fixture
def raw_response(payload_factory: Callable[..., dict[str, Any]]) -> Callable[..., bytes]:
    def _build(**kwargs: Any) -> bytes:
        return json.dumps(payload_factory(**kwargs)).encode("utf-8")

    return _build


@pytest.fixture
def console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=200, color_system=None, highlight=False), buffer


class StubTransport:
    """Records requests and replies with canned bytes (or raises)."""

    def __init__(self, reply: bytes = b"{}", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.requests: list[FileImportRequest | CsvImportRequest | UrlImportRequest] = []

    def register(self, request: FileImportRequest | CsvImportRequest | UrlImportRequest) -> bytes:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def csv_dir(tmp_path):
    directory = tmp_path / "csvs"
    directory.mkdir()
    (directory / "Models.csv").write_text(MODEL_CSV, encoding="utf-8")
    (directory / "components.CSV").write_text(COMPONENT_CSV, encoding="utf-8")
    (directory / "relationships.csv").write_text(RELATIONSHIP_CSV, encoding="utf-8")
    return directory
