import io

import pytest
from pypdf import PdfWriter

from pdfrename.store import RenameMappingStore


def _make_pdf(pages: int = 1) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=200, height=200)
    output = io.BytesIO()
    writer.write(output)
    return output.getvalue()


@pytest.fixture
def blank_pdf():
    return _make_pdf(pages=2)


@pytest.fixture
def mappings_path(tmp_path):
    return tmp_path / "data" / "rename-mappings.json"


@pytest.fixture
def store(mappings_path):
    return RenameMappingStore(mappings_path)
