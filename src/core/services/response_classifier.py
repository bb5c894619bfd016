"""Interpret the registry's import summary.

The top-level shape is validated by `RegistryResponse`; the nested records
(components, relationships, failed entities) arrive as arbitrary JSON and are
read through `expect`, which either returns a value of the requested kind or
raises `SkipEntry`. A bad entry is logged and dropped; it never aborts the
rest of the report.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence, TypeVar, Union

from pydantic import ValidationError

from core.domain.errors import DecodeError, NoModelRegisteredError, SkipEntry
from core.domain.models import RegistryResponse
from core.domain.report import (
    NARRATIVE_ENTITIES,
    NARRATIVE_UNKNOWN,
    UNKNOWN_ENTITY,
    ComponentRow,
    ErrorNarrative,
    ImportReport,
    ModelGroup,
    RelationshipEdge,
    RelationshipGroup,
    has_extension,
)

logger = logging.getLogger(__name__)

# A field of a decoded record: string, mapping, sequence or absent.
RecordValue = Union[str, Mapping[str, Any], Sequence[Any], None]

_T = TypeVar("_T")

_KIND_LABELS: dict[type, str] = {str: "string", dict: "mapping", list: "sequence"}


def parse_response(raw: bytes | str) -> RegistryResponse:
    try:
        return RegistryResponse.model_validate_json(raw)
    except ValidationError as exc:
        logger.debug("Registry response failed validation: %s", exc)
        raise DecodeError("Unable to decode response body", cause=str(exc)) from exc


def ensure_models_registered(response: RegistryResponse) -> None:
    """A 200 with no registered model is still a failed import."""

    if not response.entity_type_summary.successful_models:
        raise NoModelRegisteredError(model_names_label(response))


def model_names_label(response: RegistryResponse) -> str:
    seen: set[str] = set()
    names: list[str] = []
    for name in response.model_names:
        if name and name not in seen:
            seen.add(name)
            names.append(name)
    return ", ".join(names)


def expect(value: RecordValue, kind: type[_T], field: str) -> _T:
    if not isinstance(value, kind):
        raise SkipEntry(field, _KIND_LABELS.get(kind, kind.__name__), value)
    return value


def optional_str(record: Mapping[str, Any], key: str) -> str:
    """String field that may be absent (read as "")."""

    value = record.get(key)
    if value is None:
        return ""
    return expect(value, str, key)


def _first_kind(endpoints: RecordValue, field: str) -> str:
    items = expect(endpoints, list, field)
    if not items:
        raise SkipEntry(field, "non-empty sequence", items)
    first = expect(items[0], dict, f"{field}[0]")
    return optional_str(first, "kind")


def collect_components(response: RegistryResponse, model_name: str) -> list[ComponentRow]:
    rows: list[ComponentRow] = []
    for index, entry in enumerate(response.entity_type_summary.successful_components):
        try:
            component = expect(entry, dict, f"successful_components[{index}]")
            if optional_str(component, "Model") != model_name:
                continue
            rows.append(
                ComponentRow(
                    display_name=optional_str(component, "DisplayName"),
                    version=optional_str(component, "Version"),
                )
            )
        except SkipEntry as exc:
            logger.warning("Skipping component entry: %s", exc)
    return rows


def collect_relationships(response: RegistryResponse, model_name: str) -> list[RelationshipGroup]:
    """Group relationship edges of `model_name` by (kind, subtype, type).

    Only the first `from`/`to` endpoint of each selector is used; repeated
    (kind, subtype, type, from, to) tuples are reported once.
    """

    groups: dict[str, RelationshipGroup] = {}
    seen: set[str] = set()

    for index, entry in enumerate(response.entity_type_summary.successful_relationships):
        try:
            relationship = expect(entry, dict, f"successful_relationships[{index}]")
            if optional_str(relationship, "Model") != model_name:
                continue
            kind = optional_str(relationship, "Kind")
            subtype = optional_str(relationship, "Subtype")
            relationship_type = optional_str(relationship, "RelationshipType")
            selectors = expect(relationship.get("Selectors"), list, "Selectors")
        except SkipEntry as exc:
            logger.warning("Skipping relationship entry: %s", exc)
            continue

        key = f"{kind}/{subtype}/{relationship_type}"
        for selector_index, selector in enumerate(selectors):
            try:
                selector_map = expect(selector, dict, f"Selectors[{selector_index}]")
                allow = expect(selector_map.get("allow"), dict, "allow")
                from_kind = _first_kind(allow.get("from"), "allow.from")
                to_kind = _first_kind(allow.get("to"), "allow.to")
            except SkipEntry as exc:
                logger.warning("Skipping relationship selector of %s: %s", key, exc)
                continue

            if key + from_kind + to_kind in seen:
                continue
            seen.add(key + from_kind + to_kind)

            group = groups.get(key)
            if group is None:
                group = RelationshipGroup(
                    kind=kind,
                    subtype=subtype,
                    relationship_type=relationship_type,
                )
                groups[key] = group
            group.edges.append(RelationshipEdge(from_kind=from_kind, to_kind=to_kind))

    return list(groups.values())


def _description_items(value: RecordValue, field: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, list):
        logger.warning("%s: expected a sequence of strings, got %s", field, type(value).__name__)
        return []
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            logger.warning("Item in %s is not a string: %r", field, item)
            continue
        items.append(item)
    return items


def build_description(value: RecordValue, field: str = "LongDescription") -> str:
    return " ".join(_description_items(value, field)).strip()


def build_description_list(value: RecordValue, field: str) -> list[str]:
    return [item.strip() for item in _description_items(value, field) if item.strip()]


def collect_errors(response: RegistryResponse, model_name: str) -> list[ErrorNarrative]:
    """Failed entities attributed to `model_name`.

    An entity belongs to a model when its name equals the model name. For the
    no-model bucket (`model_name == ""`) only entities of unknown type count.
    """

    narratives: list[ErrorNarrative] = []
    for index, entry in enumerate(response.entity_type_summary.unsuccessful_entities):
        try:
            entity = expect(entry, dict, f"unsuccessful_entities[{index}]")
            names = expect(entity.get("name"), list, "name")
            entity_types = expect(entity.get("entityType"), list, "entityType")
            details = expect(entity.get("error"), dict, "error")
            if not details:
                raise SkipEntry("error", "non-empty mapping", details)
        except SkipEntry as exc:
            logger.warning("Skipping unsuccessful entity: %s", exc)
            continue

        long_description = build_description(details.get("LongDescription"), "LongDescription")
        probable_cause = build_description_list(details.get("ProbableCause"), "ProbableCause")
        remediation = build_description_list(details.get("SuggestedRemediation"), "SuggestedRemediation")

        component_count = 0
        relationship_count = 0
        matched: list[str] = []
        for position, name in enumerate(names):
            if not isinstance(name, str):
                logger.warning("Skipping entity name %r: not a string", name)
                continue
            entity_type = ""
            if position < len(entity_types):
                raw_type = entity_types[position]
                if isinstance(raw_type, str):
                    entity_type = raw_type.strip().lower()
                else:
                    logger.warning("Entity type for %s is not a string: %r", name, raw_type)

            if model_name:
                if name != model_name:
                    continue
            elif entity_type != UNKNOWN_ENTITY:
                continue

            if entity_type == UNKNOWN_ENTITY:
                narratives.append(
                    ErrorNarrative(
                        names=[name],
                        entity_kind=NARRATIVE_UNKNOWN,
                        long_description=long_description,
                        probable_cause=probable_cause,
                        suggested_remediation=remediation,
                    )
                )
            elif entity_type == "component":
                component_count += 1
                matched.append(name)
            elif entity_type == "relationship":
                relationship_count += 1
                matched.append(name)

        if component_count or relationship_count:
            narratives.append(
                ErrorNarrative(
                    names=matched,
                    entity_kind=NARRATIVE_ENTITIES,
                    long_description=long_description,
                    component_count=component_count,
                    relationship_count=relationship_count,
                    probable_cause=probable_cause,
                    suggested_remediation=remediation,
                )
            )
    return narratives


def is_empty_import(response: RegistryResponse) -> bool:
    """Model named, but nothing imported and nothing failed."""

    counts = response.entity_count
    return (
        bool(response.model_names)
        and counts.comp_count == 0
        and counts.rel_count == 0
        and counts.total_err_count == 0
    )


def build_model_group(response: RegistryResponse, model_name: str) -> ModelGroup:
    return ModelGroup(
        model_name=model_name,
        is_file_like=has_extension(model_name),
        components=collect_components(response, model_name),
        relationships=collect_relationships(response, model_name),
        errors=collect_errors(response, model_name),
    )


def group_models(response: RegistryResponse) -> list[ModelGroup]:
    """Bare model names first, then file-like names, then the no-model bucket."""

    bare: list[str] = []
    file_like: list[str] = []
    seen: set[str] = set()
    for name in response.model_names:
        if not name or name in seen:
            continue
        seen.add(name)
        (file_like if has_extension(name) else bare).append(name)

    groups = [build_model_group(response, name) for name in [*bare, *file_like]]

    orphaned = "" in response.model_names or (
        not response.model_names and response.entity_type_summary.unsuccessful_entities
    )
    if orphaned:
        groups.append(build_model_group(response, ""))
    return groups


def build_report(response: RegistryResponse) -> ImportReport:
    if is_empty_import(response):
        return ImportReport(response=response, groups=[], show_entities=False)
    return ImportReport(response=response, groups=group_models(response), show_entities=True)
