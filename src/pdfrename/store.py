"""JSON-file store for rename mappings.

The whole state is one JSON object keyed by original filename, each value a
RenameRecord in its camelCase form. Reads are synchronous; saves are
coroutines that run the blocking file I/O in a worker thread.

All saves through one store instance are serialized by a lock, so two
concurrent saves for different files cannot overwrite each other. Separate
store instances (or other processes) pointed at the same file are not
coordinated.
"""
from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from pdfrename.models import RenameRecord

log = logging.getLogger(__name__)


class MappingStoreError(Exception):
    """Base class for rename-mapping store failures."""


class MappingParseError(MappingStoreError):
    """Raised when the mapping file exists but does not hold a valid document."""


class MappingIOError(MappingStoreError):
    """Raised when the mapping file cannot be read or written."""


class RenameMappingStore:
    def __init__(self, path: Path):
        self.path = Path(path)
        self._write_lock = asyncio.Lock()

    def _read_document(self) -> dict[str, dict]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise MappingIOError(f"Could not read {self.path}: {e}") from e

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise MappingParseError(f"{self.path} is not valid JSON: {e}") from e
        if not isinstance(raw, dict):
            raise MappingParseError(
                f"{self.path} must hold a JSON object, got {type(raw).__name__}"
            )
        return raw

    def _write_document(self, document: dict[str, dict]) -> None:
        tmp_path = self.path.with_name(f"{self.path.name}.tmp-{os.getpid()}-{id(self):x}")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8"
            )
            tmp_path.replace(self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise MappingIOError(f"Could not write {self.path}: {e}") from e

    def _read_for_update(self) -> dict[str, dict]:
        try:
            return self._read_document()
        except MappingParseError as e:
            log.warning("Discarding unreadable rename mappings: %s", e)
            return {}

    def load_document(self) -> dict[str, RenameRecord]:
        """Every record on disk, failed attempts included."""
        try:
            raw = self._read_document()
            records = {key: RenameRecord.model_validate(value) for key, value in raw.items()}
        except ValidationError as e:
            log.error("Invalid rename record in %s: %s", self.path, e)
            raise MappingParseError(f"{self.path} holds an invalid rename record: {e}") from e
        except MappingParseError as e:
            log.error("Failed to parse rename mappings: %s", e)
            raise

        for key, record in records.items():
            if key != record.old_name:
                log.warning("Mapping key %r does not match oldName %r", key, record.old_name)
        return records

    def load_existing_mappings(self) -> dict[str, RenameRecord]:
        """Successful mappings keyed by original filename.

        Returns an empty dict when the file does not exist yet.

        Raises:
            MappingParseError: If the file exists but is not a valid document.
            MappingIOError: If the file exists but cannot be read.
        """
        return {
            key: record for key, record in self.load_document().items() if record.success
        }

    async def save_rename_mapping(self, record: RenameRecord) -> None:
        """Insert or fully replace the record stored under record.old_name.

        A missing or malformed file is treated as an empty document. Every
        other entry is written back exactly as it was read.

        Raises:
            MappingIOError: If the file cannot be read or the write fails. The
                document on disk is left as it was.
        """
        async with self._write_lock:
            document = await asyncio.to_thread(self._read_for_update)
            document[record.old_name] = record.to_json()
            await asyncio.to_thread(self._write_document, document)
        log.info(
            "Saved rename mapping %s -> %s (success=%s)",
            record.old_name,
            record.new_name,
            record.success,
        )

    def find_by_content(self, content: str) -> RenameRecord | None:
        if not content:
            return None
        for record in self.load_existing_mappings().values():
            if record.content == content:
                return record
        return None

    def pending_renames(self) -> list[RenameRecord]:
        return [
            record
            for record in self.load_existing_mappings().values()
            if record.needs_rename
        ]
