"""Componentes de UI para CLI (Rich).

Render del resultado de un import: resumen, tablas por modelo y narrativas de
error. Solo consume `ImportReport`/`ModelGroup`; no sabe nada de la respuesta
cruda del registry.
"""

from __future__ import annotations

from typing import Sequence

from rich.box import SIMPLE
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core.domain.errors import ModelCtlError
from core.domain.report import (
    ComponentRow,
    ErrorNarrative,
    ImportReport,
    ModelGroup,
    RelationshipGroup,
)

CATALOG_URL = "https://meshery.io/catalog/models"


def _pluralize(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def build_components_table(rows: Sequence[ComponentRow]) -> Table:
    table = Table(box=SIMPLE)
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Version", style="white")
    for row in rows:
        table.add_row(escape(row.display_name), escape(row.version))
    return table


def build_relationship_table(group: RelationshipGroup) -> Table:
    table = Table(box=SIMPLE)
    table.add_column("From", style="cyan", no_wrap=True)
    table.add_column("To", style="magenta", no_wrap=True)
    for edge in group.edges:
        table.add_row(escape(edge.from_kind), escape(edge.to_kind))
    return table


def relationship_heading(group: RelationshipGroup) -> str:
    label = "RELATIONSHIPS:" if len(group.edges) > 1 else "RELATIONSHIP:"
    return (
        f"  [bold]{label}[/bold] Kind of {escape(group.kind)}, "
        f"sub type {escape(group.subtype)} and type {escape(group.relationship_type)}"
    )


def entity_type_line(narrative: ErrorNarrative) -> str:
    """` 2 entities of type component and 1 entity of type relationship`."""

    parts: list[str] = []
    if narrative.component_count:
        word = _pluralize(narrative.component_count, "entity", "entities")
        parts.append(f" {narrative.component_count} {word} of type component")
    if narrative.relationship_count:
        word = _pluralize(narrative.relationship_count, "entity", "entities")
        parts.append(f" {narrative.relationship_count} {word} of type relationship")
    return " and".join(parts)


def print_guidance(
    console: Console,
    probable_cause: Sequence[str],
    suggested_remediation: Sequence[str],
) -> None:
    """PROBABLE CAUSE / SUGGESTED REMEDIATION blocks, only when non-empty."""

    if probable_cause:
        items = "\n".join(f"  - {escape(item)}" for item in probable_cause)
        console.print(f"\n  [bold]PROBABLE CAUSE[/bold]:\n{items}")
    if suggested_remediation:
        items = "\n".join(f"  - {escape(item)}" for item in suggested_remediation)
        console.print(f"\n  [bold]SUGGESTED REMEDIATION[/bold]:\n{items}")


def print_error_narrative(console: Console, narrative: ErrorNarrative) -> None:
    description = escape(narrative.long_description)
    if narrative.is_unknown:
        name = escape(", ".join(narrative.names))
        console.print(
            f"\n[bold]ERROR[/bold]: Error encountered while importing model {name}: \n"
            f"    {description}\n\n"
            "    Ensure that you are importing an existing model.\n"
            "    Create a new model to import or find an existing model in the Meshery "
            f"[link={CATALOG_URL}]catalog[/link]."
        )
    else:
        console.print("")
        console.print(
            f"  [bold]ERROR[/bold]: Import did not occur for{entity_type_line(narrative)} error: \n"
            f"  {description}"
        )
    print_guidance(console, narrative.probable_cause, narrative.suggested_remediation)


def print_model_group(console: Console, group: ModelGroup) -> None:
    if group.show_header:
        console.print(f"\n[bold]MODEL[/bold]: {escape(group.model_name)}")

    if group.components:
        console.print("")
        console.print(build_components_table(group.components))

    for relationship in group.relationships:
        if not relationship.edges:
            continue
        console.print("")
        console.print(relationship_heading(relationship))
        console.print(build_relationship_table(relationship))

    for narrative in group.errors:
        print_error_narrative(console, narrative)


def render_import_report(console: Console, report: ImportReport) -> None:
    summary = report.summary_message
    if summary is not None:
        console.print(f"[bold]SUMMARY[/bold]: {escape(summary)}")

    if not report.show_entities:
        return

    for group in report.groups:
        print_model_group(console, group)


def render_error(console: Console, error: ModelCtlError) -> None:
    """Presentación única de un error que termina el comando."""

    console.print(f"[bold red]ERROR[/bold red]: {escape(error.message)}")
    print_guidance(console, error.probable_cause, error.suggested_remediation)
