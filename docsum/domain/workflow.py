"""Domain entities for the summarization workflow."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from docsum.core.documents import DocumentInput
from docsum.core.errors import CleanupError, SummarizerError


class WorkflowPhase(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    SUMMARIZING = "summarizing"
    COMPLETED = "completed"

    @property
    def busy(self) -> bool:
        return self in (WorkflowPhase.UPLOADING, WorkflowPhase.SUMMARIZING)

    @property
    def step(self) -> int:
        """Wizard step shown to the user: upload, processing, result."""

        if self is WorkflowPhase.COMPLETED:
            return 3
        if self.busy:
            return 2
        return 1


@dataclass(slots=True)
class WorkflowRun:
    """State of a single upload-to-summary attempt."""

    run_id: int = 0
    phase: WorkflowPhase = WorkflowPhase.IDLE
    progress: int = 0
    document: DocumentInput | None = None
    summary: str | None = None
    raw: dict[str, Any] | None = None
    error: str | None = None
    failure: SummarizerError | None = None
    warning: str | None = None
    cancelled: bool = False
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def filename(self) -> str | None:
        return self.document.filename if self.document else None

    def advance(self, value: int) -> bool:
        """Move progress forward; never backwards within a run."""

        if value <= self.progress:
            return False
        self.progress = min(value, 100)
        return True


@dataclass(frozen=True, slots=True)
class CallLogEntry:
    """One remote call as it went over the wire."""

    sequence_id: int
    method: str
    url: str
    request: Any
    response: Any
    timestamp: datetime
    status_code: int | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.sequence_id,
            "method": self.method,
            "url": self.url,
            "data": self.request,
            "response": self.response,
            "status_code": self.status_code,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(slots=True)
class CleanupReport:
    deleted: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def error(self) -> CleanupError | None:
        return CleanupError(self.failed) if self.failed else None

    @property
    def ok(self) -> bool:
        return not self.failed

    def as_dict(self) -> dict[str, Any]:
        error = self.error
        return {
            "deleted": list(self.deleted),
            "failed": dict(self.failed),
            "warning": str(error) if error else None,
        }
