"""Modelos del dominio (Pydantic v2).

Dos lados del import:
- `IngestionRequest`: lo que se envía. Es una unión etiquetada por
  `upload_type`; cada variante solo tiene los campos de su modo.
- `RegistryResponse`: lo que devuelve el registry. Los registros anidados
  (componentes, relaciones, errores) se dejan sin tipar a propósito: el
  clasificador los valida entrada por entrada.
"""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class IngestionMode(str, Enum):
    """How the artifact travels to the registry (`uploadType` on the wire)."""

    FILE = "file"
    URL = "urlImport"
    CSV = "csv"


@dataclass(frozen=True)
class CsvTriplet:
    """Raw contents of the model, component and relationship CSV files."""

    model: bytes
    component: bytes
    relationship: bytes


@dataclass(frozen=True)
class InputDescriptor:
    """Result of classifying the user input.

    `data` holds the artifact for FILE mode (or optional pre-parsed model
    bytes for URL mode); `csv` is only set for CSV mode.
    """

    mode: IngestionMode
    source: str
    file_name: str = ""
    data: bytes | None = None
    csv: CsvTriplet | None = None


class _ImportRequestBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", protected_namespaces=())

    register_model: bool = Field(
        default=True,
        serialization_alias="register",
        description="Pide al registry registrar lo importado (no solo validarlo).",
    )
    file_name: str = Field(
        default="",
        description="Nombre del artefacto tal como lo verá el registry.",
    )

    @property
    def mode(self) -> IngestionMode:
        return IngestionMode(self.upload_type)  # type: ignore[attr-defined]

    def _import_body(self) -> dict[str, Any]:
        raise NotImplementedError

    def to_payload(self) -> dict[str, Any]:
        """Objeto JSON que espera `POST /api/meshmodels/register`."""

        body = self._import_body()
        body["fileName"] = self.file_name
        return {
            "uploadType": self.mode.value,
            "register": self.register_model,
            "importBody": body,
        }

    def to_json(self) -> bytes:
        return json.dumps(self.to_payload(), ensure_ascii=False).encode("utf-8")


class FileImportRequest(_ImportRequestBase):
    upload_type: Literal["file"] = "file"
    model_file: bytes = Field(
        ...,
        description="Bytes del artefacto (fichero tal cual o directorio en tar.gz).",
    )

    def _import_body(self) -> dict[str, Any]:
        # Byte slices travel as standard base64 in JSON.
        return {"modelFile": base64.b64encode(self.model_file).decode("ascii")}


class CsvImportRequest(_ImportRequestBase):
    upload_type: Literal["csv"] = "csv"
    model_csv: str = Field(..., description="Data URI base64 del CSV de modelos.")
    component_csv: str = Field(..., description="Data URI base64 del CSV de componentes.")
    relationship_csv: str = Field(..., description="Data URI base64 del CSV de relaciones.")

    def _import_body(self) -> dict[str, Any]:
        return {
            "modelCsv": self.model_csv,
            "componentCsv": self.component_csv,
            "relationshipCsv": self.relationship_csv,
        }


class UrlImportRequest(_ImportRequestBase):
    upload_type: Literal["urlImport"] = "urlImport"
    url: str = Field(..., min_length=1, description="URL de origen del modelo.")
    model: dict[str, Any] | None = Field(
        default=None,
        description="Modelo ya estructurado (opcional).",
    )

    def _import_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"url": self.url}
        if self.model is not None:
            body["model"] = self.model
        return body


IngestionRequest = Annotated[
    Union[FileImportRequest, CsvImportRequest, UrlImportRequest],
    Field(discriminator="upload_type"),
]


def _aliases(*names: str) -> AliasChoices:
    return AliasChoices(*names)


class EntityCount(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, protected_namespaces=())

    model_count: int = Field(default=0, validation_alias=_aliases("model_count", "ModelCount", "modelCount"))
    comp_count: int = Field(default=0, validation_alias=_aliases("comp_count", "CompCount", "compCount"))
    rel_count: int = Field(default=0, validation_alias=_aliases("rel_count", "RelCount", "relCount"))
    total_err_count: int = Field(
        default=0,
        validation_alias=_aliases("total_err_count", "TotalErrCount", "totalErrCount"),
    )

    @field_validator("model_count", "comp_count", "rel_count", "total_err_count", mode="before")
    @classmethod
    def _null_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class EntityTypeSummary(BaseModel):
    """Resumen por tipo de entidad; cada registro es un mapping sin tipar."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    successful_models: list[Any] = Field(
        default_factory=list,
        validation_alias=_aliases("successful_models", "SuccessfulModels", "successfulModels"),
    )
    successful_components: list[Any] = Field(
        default_factory=list,
        validation_alias=_aliases("successful_components", "SuccessfulComponents", "successfulComponents"),
    )
    successful_relationships: list[Any] = Field(
        default_factory=list,
        validation_alias=_aliases(
            "successful_relationships", "SuccessfulRelationships", "successfulRelationships"
        ),
    )
    unsuccessful_entities: list[Any] = Field(
        default_factory=list,
        validation_alias=_aliases(
            "unsuccessful_entity_name_with_error",
            "UnsuccessfulEntityNameWithError",
            "unsuccessfulEntityNameWithError",
        ),
    )

    @field_validator(
        "successful_models",
        "successful_components",
        "successful_relationships",
        "unsuccessful_entities",
        mode="before",
    )
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class RegistryResponse(BaseModel):
    """Respuesta de `POST /api/meshmodels/register`.

    Acepta claves snake_case (JSON del servidor), CamelCase y camelCase.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, protected_namespaces=())

    model_names: list[str] = Field(
        default_factory=list,
        validation_alias=_aliases("model_name", "ModelName", "modelNames"),
        description="Nombres de modelo en orden; pueden repetirse o ser vacíos.",
    )
    entity_count: EntityCount = Field(
        default_factory=EntityCount,
        validation_alias=_aliases("entity_count", "EntityCount", "entityCount"),
    )
    summary_message: str = Field(
        default="",
        validation_alias=_aliases("err_msg", "ErrMsg", "summaryMessage"),
    )
    entity_type_summary: EntityTypeSummary = Field(
        default_factory=EntityTypeSummary,
        validation_alias=_aliases("entity_type_summary", "EntityTypeSummary", "entityTypeSummary"),
    )

    @field_validator("model_names", mode="before")
    @classmethod
    def _null_names(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("summary_message", mode="before")
    @classmethod
    def _null_message(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("entity_count", "entity_type_summary", mode="before")
    @classmethod
    def _null_section(cls, value: Any) -> Any:
        return {} if value is None else value
