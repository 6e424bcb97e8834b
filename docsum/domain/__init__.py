"""Domain layer definitions."""

from .workflow import CallLogEntry, CleanupReport, WorkflowPhase, WorkflowRun

__all__ = [
    "CallLogEntry",
    "CleanupReport",
    "WorkflowPhase",
    "WorkflowRun",
]
