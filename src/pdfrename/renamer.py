from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path

from pypdf.errors import PdfReadError

from pdfrename.models import RenameRecord, utc_timestamp
from pdfrename.pdf_utils import extract_content_snippet, get_total_pages
from pdfrename.store import MappingStoreError, RenameMappingStore

log = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
_REPEATED_DASHES = re.compile(r"-{2,}")


class DuplicateRenameError(Exception):
    """Raised when another file with the same content has already been renamed."""

    def __init__(self, existing: RenameRecord):
        self.existing = existing
        super().__init__(
            f"Content already renamed from '{existing.old_name}' "
            f"to '{existing.new_name}'"
        )


def sanitize_filename(name: str) -> str:
    """Turn a proposed name into a safe, lower-case '<stem>.pdf' filename.

    >>> sanitize_filename("2024-03 Invoice ACME.pdf")
    '2024-03-invoice-acme.pdf'
    """
    base = Path(name.replace("\\", "/")).name
    stem = base[:-4] if base.lower().endswith(".pdf") else base
    stem = _UNSAFE_CHARS.sub("-", stem)
    stem = _REPEATED_DASHES.sub("-", stem).strip("-.").lower()
    if not stem:
        raise ValueError(f"Unusable filename: {name!r}")
    return f"{stem}.pdf"


async def rename_pdf(
    directory: Path,
    old_name: str,
    new_name: str,
    store: RenameMappingStore,
    needs_rename: bool = False,
) -> RenameRecord:
    """Rename a PDF inside directory and record the outcome in the store.

    A target that already exists, or an OS-level rename failure, is recorded
    as an unsuccessful attempt rather than raised. If the outcome cannot be
    saved, a completed rename is moved back before the store error propagates.

    Raises:
        FileNotFoundError: If old_name does not exist in directory.
        ValueError: If new_name sanitizes to nothing or the PDF has no pages.
        DuplicateRenameError: If a different file with the same content has
            already been renamed successfully.
        MappingStoreError: If the record cannot be saved.
    """
    source = Path(directory) / Path(old_name).name
    if not source.is_file():
        raise FileNotFoundError(f"No such PDF: {source}")
    target_name = sanitize_filename(new_name)
    target = source.with_name(target_name)

    pdf_bytes = await asyncio.to_thread(source.read_bytes)
    try:
        total_pages = get_total_pages(pdf_bytes)
        content = extract_content_snippet(pdf_bytes) if total_pages else ""
    except PdfReadError as e:
        log.warning("Could not extract text from %s: %s", source, e)
        total_pages = None
        content = ""
    if total_pages == 0:
        raise ValueError(f"{source.name} has no pages")

    existing = store.find_by_content(content)
    if existing is not None and source.name not in (existing.old_name, existing.new_name):
        raise DuplicateRenameError(existing)

    success = False
    if target.exists() and target != source:
        log.warning("Refusing to rename %s: %s already exists", source.name, target_name)
    else:
        try:
            await asyncio.to_thread(source.rename, target)
            success = True
        except OSError:
            log.exception("Failed to rename %s to %s", source, target)

    record = RenameRecord(
        old_name=source.name,
        new_name=target_name,
        success=success,
        timestamp=utc_timestamp(),
        content=content or None,
        needs_rename=needs_rename,
    )
    try:
        await store.save_rename_mapping(record)
    except MappingStoreError:
        if success and target != source:
            log.error("Could not record rename of %s, moving it back", source.name)
            await asyncio.to_thread(target.rename, source)
        raise
    return record
