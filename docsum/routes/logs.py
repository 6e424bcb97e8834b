from __future__ import annotations

from fastapi import APIRouter

from docsum.application import get_workflow
from docsum.core.documents import ACCEPTED_EXTENSIONS

router = APIRouter(tags=["diagnostics"])


@router.get("/logs")
async def list_call_logs() -> dict:
    entries = get_workflow().call_log()
    return {"items": [entry.as_dict() for entry in entries]}


@router.get("/documents/accepted")
async def list_accepted_extensions() -> dict:
    return {"extensions": list(ACCEPTED_EXTENSIONS)}
