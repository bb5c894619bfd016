"""Report structures derived from a `RegistryResponse`.

These values are rebuilt on every render and carry no identity of their own;
the renderer consumes them without touching the raw response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath

from core.domain.models import RegistryResponse

UNKNOWN_ENTITY = "unknown"
NARRATIVE_UNKNOWN = "unknown"
NARRATIVE_ENTITIES = "entities"


def has_extension(name: str) -> bool:
    """True when `name` looks like a file name (e.g. `my-model.yaml`)."""

    return PurePath(name).suffix != ""


@dataclass(frozen=True)
class ComponentRow:
    display_name: str
    version: str


@dataclass(frozen=True)
class RelationshipEdge:
    from_kind: str
    to_kind: str


@dataclass
class RelationshipGroup:
    kind: str
    subtype: str
    relationship_type: str
    edges: list[RelationshipEdge] = field(default_factory=list)

    @property
    def key(self) -> str:
        return f"{self.kind}/{self.subtype}/{self.relationship_type}"


@dataclass
class ErrorNarrative:
    """One failed-entity entry attributed to a model.

    `entity_kind == "unknown"` means the entity could not be mapped to any
    known model and gets a catalog referral instead of counts.
    """

    names: list[str]
    entity_kind: str
    long_description: str = ""
    component_count: int = 0
    relationship_count: int = 0
    probable_cause: list[str] = field(default_factory=list)
    suggested_remediation: list[str] = field(default_factory=list)

    @property
    def is_unknown(self) -> bool:
        return self.entity_kind == NARRATIVE_UNKNOWN


@dataclass
class ModelGroup:
    model_name: str
    is_file_like: bool
    components: list[ComponentRow] = field(default_factory=list)
    relationships: list[RelationshipGroup] = field(default_factory=list)
    errors: list[ErrorNarrative] = field(default_factory=list)

    @property
    def show_header(self) -> bool:
        return bool(self.model_name) and not self.is_file_like


@dataclass
class ImportReport:
    """Everything the renderer needs, in render order."""

    response: RegistryResponse
    groups: list[ModelGroup] = field(default_factory=list)
    show_entities: bool = True

    @property
    def summary_message(self) -> str | None:
        if self.response.entity_count.model_count == 0:
            return None
        return self.response.summary_message
