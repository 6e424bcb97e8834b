from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, File, HTTPException, UploadFile

from docsum.application import get_workflow
from docsum.core.documents import DocumentInput
from docsum.core.errors import ConflictError, ValidationError

router = APIRouter(prefix="/session", tags=["session"])


@router.get("")
async def get_session() -> dict:
    return get_workflow().snapshot()


@router.post("/process")
async def process_document(file: UploadFile | None = File(default=None)) -> dict:
    """Upload a document, summarize it and return the resulting session state."""
    workflow = get_workflow()

    document: DocumentInput | None = None
    if file is not None:
        try:
            content = await file.read()
            document = DocumentInput(
                filename=Path(file.filename or "document").name,
                content=content,
                content_type=file.content_type,
            )
        finally:
            await file.close()

    try:
        await workflow.start(document)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return workflow.snapshot()


@router.post("/cancel")
async def cancel_processing() -> dict:
    workflow = get_workflow()
    cancelled = workflow.cancel()
    return {"cancelled": cancelled, "session": workflow.snapshot()}


@router.post("/reset")
async def reset_session() -> dict:
    workflow = get_workflow()
    try:
        workflow.reset()
    except ConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return workflow.snapshot()


@router.post("/cleanup")
async def delete_created_objects() -> dict:
    """Delete every remote object created so far; failures are reported, not raised."""
    workflow = get_workflow()
    try:
        report = await workflow.cleanup()
    except ConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"report": report.as_dict(), "session": workflow.snapshot()}


@router.get("/raw")
async def get_raw_result() -> dict:
    run = get_workflow().run
    if run.raw is None:
        raise HTTPException(status_code=404, detail="no summary available")
    return run.raw
