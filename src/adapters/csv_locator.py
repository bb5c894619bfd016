"""Localiza el trío de CSVs (model / component / relationship) en un directorio.

Cada fichero se identifica por su cabecera, no por su nombre:
- component: tiene columna `component`
- relationship: tiene `kind` y `subType` (o `relationshipType`)
- model: tiene `modelDisplayName` (o `model` + `registrant`)

Si falta un rol o hay más de un candidato se eleva `CsvLocationError` con
causa probable y remediación para el usuario.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path

from core.domain.errors import CsvLocationError, FileReadError

logger = logging.getLogger(__name__)

ROLE_MODEL = "model"
ROLE_COMPONENT = "component"
ROLE_RELATIONSHIP = "relationship"
_ROLES = (ROLE_MODEL, ROLE_COMPONENT, ROLE_RELATIONSHIP)


@dataclass(frozen=True)
class CsvLocation:
    model: Path
    component: Path
    relationship: Path


def is_csv(path: Path) -> bool:
    return path.suffix.lower() == ".csv"


def read_csv_header(path: Path) -> list[str]:
    """Primera fila del CSV, normalizada a minúsculas."""

    try:
        with path.open(newline="", encoding="utf-8-sig") as fh:
            row = next(csv.reader(fh), [])
    except OSError as exc:
        raise FileReadError(str(path), exc) from exc
    return [cell.strip().lower() for cell in row]


def classify_header(header: list[str]) -> str | None:
    columns = set(header)
    if "component" in columns:
        return ROLE_COMPONENT
    if "kind" in columns and ({"subtype", "relationshiptype"} & columns):
        return ROLE_RELATIONSHIP
    if "modeldisplayname" in columns or {"model", "registrant"} <= columns:
        return ROLE_MODEL
    return None


def locate_csv_files(directory: str | Path) -> CsvLocation:
    root = Path(directory)
    candidates: dict[str, list[Path]] = {role: [] for role in _ROLES}

    for path in sorted(root.iterdir()):
        if path.is_dir() or not is_csv(path):
            continue
        try:
            header = read_csv_header(path)
        except UnicodeDecodeError:
            logger.warning("Skipping %s: not a UTF-8 CSV file", path)
            continue
        except csv.Error as exc:
            logger.warning("Skipping %s: unreadable CSV header (%s)", path, exc)
            continue
        role = classify_header(header)
        if role is None:
            logger.debug("Skipping %s: header does not match any CSV role", path)
            continue
        candidates[role].append(path)

    missing = [role for role in _ROLES if not candidates[role]]
    if missing:
        raise CsvLocationError(
            f"Unable to locate the {', '.join(missing)} CSV file(s) in '{root}'",
            str(root),
            probable_cause=[
                f"The directory has no CSV file whose header matches the {role} CSV format"
                for role in missing
            ],
            suggested_remediation=[
                "Provide a directory containing exactly one model CSV, one component CSV "
                "and one relationship CSV",
                "Use the CSV templates from the model documentation as a starting point",
            ],
        )

    ambiguous = {role: paths for role, paths in candidates.items() if len(paths) > 1}
    if ambiguous:
        listed = "; ".join(
            f"{role}: {', '.join(p.name for p in paths)}" for role, paths in ambiguous.items()
        )
        raise CsvLocationError(
            f"More than one candidate CSV file found in '{root}' ({listed})",
            str(root),
            probable_cause=["Several CSV files share the same header format"],
            suggested_remediation=["Keep a single CSV file per role in the directory"],
        )

    return CsvLocation(
        model=candidates[ROLE_MODEL][0],
        component=candidates[ROLE_COMPONENT][0],
        relationship=candidates[ROLE_RELATIONSHIP][0],
    )
