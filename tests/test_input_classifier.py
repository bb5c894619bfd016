from __future__ import annotations

import io
import tarfile
from pathlib import Path

import pytest

from core.domain.errors import CsvLocationError, FileReadError, FolderStatError
from core.domain.models import IngestionMode
from core.services import input_classifier
from core.services.input_classifier import classify_input, has_csvs, is_valid_url


@pytest.mark.parametrize(
    "value",
    [
        "https://github.com/meshery/meshery/releases/download/v1/model.tar.gz",
        "http://localhost:9081/models/kubernetes",
        "oci://ghcr.io/org/model:1.0",
    ],
)
def test_valid_urls_select_url_mode_without_stat(value: str, monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail(*_: object, **__: object) -> None:
        raise AssertionError("filesystem must not be touched for URLs")

    monkeypatch.setattr(input_classifier, "has_csvs", _fail)

    descriptor = classify_input(value)

    assert descriptor.mode is IngestionMode.URL
    assert descriptor.source == value
    assert descriptor.data is None
    assert descriptor.file_name == ""


@pytest.mark.parametrize("value", ["model.yaml", "./models/kubernetes", "/tmp/model.json", "not a url", ""])
def test_paths_are_not_urls(value: str) -> None:
    assert not is_valid_url(value)


def test_has_csvs_is_case_insensitive(tmp_path: Path) -> None:
    (tmp_path / "Components.CSV").write_text("model,component\n", encoding="utf-8")

    assert has_csvs(tmp_path)


def test_has_csvs_ignores_other_files_and_directories(tmp_path: Path) -> None:
    (tmp_path / "model.json").write_text("{}", encoding="utf-8")
    (tmp_path / "nested.csv").mkdir()

    assert not has_csvs(tmp_path)
    assert not has_csvs(tmp_path / "model.json")
    assert not has_csvs(tmp_path / "missing")


def test_csv_directory_selects_csv_mode(csv_dir: Path) -> None:
    descriptor = classify_input(str(csv_dir))

    assert descriptor.mode is IngestionMode.CSV
    assert descriptor.file_name == "model.csv"
    assert descriptor.csv is not None
    assert descriptor.csv.model.startswith(b"registrant,modelDisplayName")
    assert descriptor.csv.component.startswith(b"model,component")
    assert descriptor.csv.relationship.startswith(b"model,key,kind")


def test_csv_directory_without_triplet_fails(tmp_path: Path) -> None:
    (tmp_path / "components.csv").write_text("model,component\nk8s,Pod\n", encoding="utf-8")

    with pytest.raises(CsvLocationError) as excinfo:
        classify_input(str(tmp_path))

    assert excinfo.value.probable_cause
    assert excinfo.value.suggested_remediation


def test_single_file_is_sent_verbatim(tmp_path: Path) -> None:
    artifact = tmp_path / "my-model.yaml"
    artifact.write_bytes(b"name: my-model\n")

    descriptor = classify_input(str(artifact))

    assert descriptor.mode is IngestionMode.FILE
    assert descriptor.file_name == "my-model.yaml"
    assert descriptor.data == b"name: my-model\n"


def test_directory_without_csvs_is_packed_as_tar_gz(tmp_path: Path) -> None:
    model_dir = tmp_path / "kubernetes"
    (model_dir / "components").mkdir(parents=True)
    (model_dir / "model.json").write_text('{"name": "kubernetes"}', encoding="utf-8")
    (model_dir / "components" / "pod.json").write_text('{"kind": "Pod"}', encoding="utf-8")

    descriptor = classify_input(str(model_dir))

    assert descriptor.mode is IngestionMode.FILE
    assert descriptor.file_name == "kubernetes.tar.gz"
    assert descriptor.data is not None
    with tarfile.open(fileobj=io.BytesIO(descriptor.data), mode="r:gz") as tar:
        names = tar.getnames()
    assert "kubernetes/model.json" in names
    assert "kubernetes/components/pod.json" in names


def test_missing_path_raises_folder_stat_error(tmp_path: Path) -> None:
    with pytest.raises(FolderStatError) as excinfo:
        classify_input(str(tmp_path / "nope"))

    assert excinfo.value.error_code == "FOLDER_STAT_ERROR"


def test_unreadable_file_raises_file_read_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    artifact = tmp_path / "model.yaml"
    artifact.write_text("name: model\n", encoding="utf-8")

    def _fail(self: Path) -> bytes:
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "read_bytes", _fail)

    with pytest.raises(FileReadError) as excinfo:
        classify_input(str(artifact))

    assert excinfo.value.error_code == "FILE_READ_ERROR"
    assert "model.yaml" in excinfo.value.message
