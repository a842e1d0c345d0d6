from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict

PROJECT_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseModel):
    """Process-wide paths. Built once at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    data_dir: Path
    mappings_path: Path
    pdf_dir: Path


def load_settings() -> Settings:
    data_dir = Path(os.environ.get("PDFRENAME_DATA_DIR", PROJECT_ROOT / "data"))
    return Settings(
        data_dir=data_dir,
        mappings_path=Path(
            os.environ.get("PDFRENAME_MAPPINGS_PATH", data_dir / "rename-mappings.json")
        ),
        pdf_dir=Path(os.environ.get("PDFRENAME_PDF_DIR", data_dir / "pdfs")),
    )
