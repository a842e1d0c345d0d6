from pathlib import Path

import pydantic
import pytest

from pdfrename.config import load_settings


def test_paths_default_under_data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("PDFRENAME_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("PDFRENAME_MAPPINGS_PATH", raising=False)
    monkeypatch.delenv("PDFRENAME_PDF_DIR", raising=False)

    settings = load_settings()

    assert settings.mappings_path == tmp_path / "rename-mappings.json"
    assert settings.pdf_dir == tmp_path / "pdfs"


def test_explicit_mappings_path_wins(tmp_path, monkeypatch):
    monkeypatch.setenv("PDFRENAME_MAPPINGS_PATH", str(tmp_path / "custom.json"))

    assert load_settings().mappings_path == Path(tmp_path / "custom.json")


def test_settings_are_immutable(tmp_path, monkeypatch):
    monkeypatch.setenv("PDFRENAME_DATA_DIR", str(tmp_path))
    settings = load_settings()

    with pytest.raises(pydantic.ValidationError):
        settings.mappings_path = tmp_path / "other.json"
