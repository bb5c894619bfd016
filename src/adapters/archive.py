"""Empaquetado en memoria de directorios (tar + gzip)."""

from __future__ import annotations

import io
import tarfile
from pathlib import Path


def compress_directory(directory: str | Path) -> bytes:
    """Devuelve `directory` como un tar.gz en memoria.

    Las entradas quedan bajo el nombre base del directorio, como haría
    `tar czf <name>.tar.gz <name>`.
    """

    root = Path(directory).resolve()
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        tar.add(str(root), arcname=root.name)
    return buf.getvalue()
