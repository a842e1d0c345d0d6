from __future__ import annotations

import io

from pypdf import PdfReader


def get_total_pages(pdf_bytes: bytes) -> int:
    """Return total page count from PDF bytes."""
    reader = PdfReader(io.BytesIO(pdf_bytes))
    return len(reader.pages)


def extract_content_snippet(
    pdf_bytes: bytes, max_chars: int = 500, max_pages: int = 2
) -> str:
    """Text of the first max_pages pages, whitespace-collapsed and cut to max_chars.

    Returns an empty string for PDFs without a text layer.
    """
    reader = PdfReader(io.BytesIO(pdf_bytes))
    parts: list[str] = []
    for i in range(min(max_pages, len(reader.pages))):
        parts.append(reader.pages[i].extract_text() or "")
    snippet = " ".join(" ".join(parts).split())
    return snippet[:max_chars]
