from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
load_dotenv()

import logfire
logfire.configure(
    service_name="pdfrename-server",
    environment=os.environ.get("PDFRENAME_ENVIRONMENT", "development"),
    send_to_logfire="if-token-present",
)
logging.basicConfig(level=logging.INFO, handlers=[logfire.LogfireLoggingHandler()])

from fastapi import FastAPI, HTTPException

from pdfrename.config import load_settings
from pdfrename.models import RenameRecord, RenameRequest, utc_timestamp
from pdfrename.renamer import DuplicateRenameError, rename_pdf
from pdfrename.store import MappingStoreError, RenameMappingStore

app = FastAPI(title="pdfrename", description="Rename-mapping store for PDF libraries")
logfire.instrument_fastapi(app)

settings = load_settings()
store = RenameMappingStore(settings.mappings_path)


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Mappings
# ---------------------------------------------------------------------------
@app.get("/mappings", response_model=dict[str, RenameRecord], response_model_exclude_none=True)
async def list_mappings():
    """List successful rename mappings keyed by original filename."""
    try:
        return store.load_existing_mappings()
    except MappingStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/mappings/pending", response_model=list[RenameRecord], response_model_exclude_none=True)
async def list_pending():
    """List successful mappings that still need another rename pass."""
    try:
        return store.pending_renames()
    except MappingStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/mappings", response_model=RenameRecord, response_model_exclude_none=True)
async def save_mapping(record: RenameRecord):
    """Insert or replace the mapping for record.oldName. A missing timestamp is set to now."""
    if record.timestamp is None:
        record = record.model_copy(update={"timestamp": utc_timestamp()})
    try:
        await store.save_rename_mapping(record)
    except MappingStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return record


# ---------------------------------------------------------------------------
# Rename
# ---------------------------------------------------------------------------
@app.post("/rename", response_model=RenameRecord, response_model_exclude_none=True)
async def rename(request: RenameRequest):
    """Rename a PDF in the configured directory and record the outcome."""
    try:
        return await rename_pdf(
            settings.pdf_dir,
            request.old_name,
            request.new_name,
            store,
            needs_rename=request.needs_rename,
        )
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"PDF not found: {request.old_name}")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except DuplicateRenameError as e:
        raise HTTPException(
            status_code=409,
            detail=f"Duplicate content: already renamed from "
            f"'{e.existing.old_name}' to '{e.existing.new_name}'",
        )
    except MappingStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


def main():
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
