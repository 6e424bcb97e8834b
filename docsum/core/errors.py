from __future__ import annotations

from typing import Any

UNKNOWN_ERROR = "Unknown error"


class SummarizerError(Exception):
    """Base class for every error raised by the summarizer."""


class ValidationError(SummarizerError):
    """Raised when caller input is missing or invalid."""


class ConflictError(SummarizerError):
    """Raised when an operation collides with a run that is still in flight."""


class DocumentReadError(SummarizerError):
    """Raised when the local document cannot be read into memory."""


class RemoteError(SummarizerError):
    """Raised when the remote text-processing API rejects or fails a call."""

    action = "call remote service"

    def __init__(self, detail: str, *, status_code: int | None = None, payload: Any = None) -> None:
        self.detail = detail
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"Failed to {self.action}: {detail}")


class RemoteWriteError(RemoteError):
    action = "upload document"


class TransformError(RemoteError):
    action = "generate summary"


class RemoteReadError(RemoteError):
    action = "retrieve summary"


class RemoteDeleteError(RemoteError):
    action = "delete object"


class CleanupError(SummarizerError):
    """Aggregated, non-fatal failure of one or more deletions during cleanup."""

    def __init__(self, failures: dict[str, str]) -> None:
        self.failures = dict(failures)
        names = ", ".join(self.failures)
        super().__init__(f"Failed to delete objects: {names}")


__all__ = [
    "CleanupError",
    "ConflictError",
    "DocumentReadError",
    "RemoteDeleteError",
    "RemoteError",
    "RemoteReadError",
    "RemoteWriteError",
    "SummarizerError",
    "TransformError",
    "UNKNOWN_ERROR",
    "ValidationError",
]
