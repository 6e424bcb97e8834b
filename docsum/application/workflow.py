"""Upload, summarize and clean up: the orchestration behind the wizard."""
from __future__ import annotations

import asyncio
import itertools
import logging
from datetime import datetime, timezone
from typing import Any, Callable

from docsum.core.documents import DocumentInput
from docsum.core.errors import ConflictError, RemoteError, SummarizerError, ValidationError
from docsum.domain import CallLogEntry, CleanupReport, WorkflowPhase, WorkflowRun
from docsum.infrastructure import (
    COMBINE_EVENTS,
    CallAuditLog,
    ObjectStoreClient,
    RemoteSession,
    TransformClient,
)

logger = logging.getLogger(__name__)

ProgressListener = Callable[[WorkflowRun], None]

INPUT_OBJECT_NAME = "uploaded_document"
OUTPUT_OBJECT_NAME = "document_summary"
NO_FILE_MESSAGE = "Please select a file first"


def summary_template(input_name: str) -> str:
    return (
        "Analyze this document and identify the key topics/subjects discussed. "
        "Provide exactly 2 bullet points that summarize the main themes. "
        "Format as clean bullet points without any additional text or explanation: "
        f"{{{input_name}}}"
    )


class SummaryWorkflow:
    """State machine driving one document at a time through the remote API.

    ``IDLE -> UPLOADING -> SUMMARIZING -> COMPLETED``; failures and cancellation
    return to ``IDLE``. Remote object names created along the way are kept in a
    ledger that outlives individual runs until :meth:`cleanup` deletes them.

    Cancellation is cooperative. :meth:`cancel` flips the run back to ``IDLE``
    straight away, while the coroutine running it notices the flag after its
    current remote call returns and stops without touching run state. Calls are
    serialised through a lock so a new run never overlaps a cancelled one.
    """

    def __init__(
        self,
        objects: ObjectStoreClient,
        transforms: TransformClient,
        audit_log: CallAuditLog,
        *,
        input_name: str = INPUT_OBJECT_NAME,
        output_name: str = OUTPUT_OBJECT_NAME,
        template: str | None = None,
        combine_mode: str = COMBINE_EVENTS,
        progress_listener: ProgressListener | None = None,
    ) -> None:
        self._objects = objects
        self._transforms = transforms
        self._audit_log = audit_log
        self._input_name = input_name
        self._output_name = output_name
        self._template = template or summary_template(input_name)
        self._combine_mode = combine_mode
        self._progress_listener = progress_listener
        self._session: RemoteSession | None = None

        self._run = WorkflowRun()
        self._run_ids = itertools.count(1)
        self._ledger: list[str] = []
        self._call_lock = asyncio.Lock()

    @classmethod
    def from_session(cls, session: RemoteSession, **options: Any) -> "SummaryWorkflow":
        workflow = cls(
            ObjectStoreClient(session),
            TransformClient(session),
            session.audit_log,
            **options,
        )
        workflow._session = session
        return workflow

    # ------------------------------------------------------------------
    # read-only views
    # ------------------------------------------------------------------
    @property
    def run(self) -> WorkflowRun:
        return self._run

    @property
    def phase(self) -> WorkflowPhase:
        return self._run.phase

    @property
    def created_objects(self) -> list[str]:
        return list(self._ledger)

    @property
    def template(self) -> str:
        return self._template

    def call_log(self) -> list[CallLogEntry]:
        return self._audit_log.list()

    def snapshot(self) -> dict[str, Any]:
        run = self._run
        return {
            "run_id": run.run_id,
            "phase": run.phase.value,
            "step": run.phase.step,
            "progress": run.progress,
            "filename": run.filename,
            "summary": run.summary,
            "error": run.error,
            "warning": run.warning,
            "created_objects": self.created_objects,
            "started_at": run.started_at.isoformat() if run.started_at else None,
            "finished_at": run.finished_at.isoformat() if run.finished_at else None,
        }

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _is_stale(self, run: WorkflowRun) -> bool:
        return run.cancelled or run is not self._run

    def _remember(self, name: str) -> None:
        if name not in self._ledger:
            self._ledger.append(name)

    def _report_progress(self, run: WorkflowRun, value: int) -> None:
        if self._is_stale(run) or run.phase is WorkflowPhase.IDLE:
            return
        if run.advance(value) and self._progress_listener is not None:
            self._progress_listener(run)

    def _transition(self, run: WorkflowRun, phase: WorkflowPhase) -> None:
        logger.info("Run %s: %s -> %s", run.run_id, run.phase.value, phase.value)
        run.phase = phase

    def _fail(self, run: WorkflowRun, exc: SummarizerError) -> None:
        logger.warning("Run %s failed during %s: %s", run.run_id, run.phase.value, exc)
        self._transition(run, WorkflowPhase.IDLE)
        run.progress = 0
        run.error = str(exc)
        run.failure = exc
        run.finished_at = datetime.now(timezone.utc)

    async def _execute(self, run: WorkflowRun) -> None:
        try:
            if run.document is None:
                raise ValidationError(NO_FILE_MESSAGE)
            self._report_progress(run, 20)
            content = run.document.read_text()

            self._report_progress(run, 40)
            await self._objects.create_object(self._input_name, [content])
            self._remember(self._input_name)
            if self._is_stale(run):
                logger.info("Run %s was cancelled; discarding upload response", run.run_id)
                return

            self._transition(run, WorkflowPhase.SUMMARIZING)
            self._report_progress(run, 70)
            await self._transforms.apply_transform(
                self._output_name,
                self._template,
                [(self._input_name, self._combine_mode)],
            )
            self._remember(self._output_name)
            if self._is_stale(run):
                logger.info("Run %s was cancelled; discarding transform response", run.run_id)
                return

            self._report_progress(run, 90)
            fetched = await self._objects.fetch_object(self._output_name)
            if self._is_stale(run):
                logger.info("Run %s was cancelled; discarding summary", run.run_id)
                return
        except SummarizerError as exc:
            if self._is_stale(run):
                logger.info("Run %s was cancelled; ignoring late failure: %s", run.run_id, exc)
                return
            self._fail(run, exc)
            return

        run.summary = fetched.text_value
        run.raw = fetched.raw
        run.finished_at = datetime.now(timezone.utc)
        self._transition(run, WorkflowPhase.COMPLETED)
        self._report_progress(run, 100)

    # ------------------------------------------------------------------
    # transitions
    # ------------------------------------------------------------------
    async def start(self, document: DocumentInput | None) -> WorkflowRun:
        """Run upload, transform and fetch for ``document``.

        Remote failures do not raise; they end the run in ``IDLE`` with
        ``run.error`` set. A missing document raises :class:`ValidationError`
        and a run already in flight raises :class:`ConflictError`.
        """

        if self._run.phase.busy:
            raise ConflictError("A document is already being processed")
        if document is None:
            error = ValidationError(NO_FILE_MESSAGE)
            # a completed run keeps its result; the error is only shown on the upload step
            if self._run.phase is WorkflowPhase.IDLE:
                self._run.error = str(error)
                self._run.failure = error
            raise error

        run = WorkflowRun(
            run_id=next(self._run_ids),
            phase=WorkflowPhase.UPLOADING,
            document=document,
            started_at=datetime.now(timezone.utc),
        )
        self._run = run
        logger.info("Run %s: processing %s (%d bytes)", run.run_id, document.filename, document.size)

        async with self._call_lock:
            if self._is_stale(run):
                return run
            await self._execute(run)
        return run

    def cancel(self) -> bool:
        """Abandon the in-flight run. Returns ``False`` when nothing was running."""

        run = self._run
        if not run.phase.busy:
            return False
        run.cancelled = True
        self._transition(run, WorkflowPhase.IDLE)
        run.progress = 0
        run.finished_at = datetime.now(timezone.utc)
        return True

    def reset(self) -> WorkflowRun:
        """Forget the current document and result. The ledger is kept."""

        if self._run.phase.busy:
            raise ConflictError("Cancel the running document before resetting")
        self._run = WorkflowRun(run_id=self._run.run_id)
        return self._run

    async def cleanup(self) -> CleanupReport:
        """Delete every ledger object, best effort, and return to ``IDLE``."""

        if self._run.phase.busy:
            raise ConflictError("Cannot delete objects while a document is being processed")

        run = self._run
        report = CleanupReport()
        async with self._call_lock:
            for name in list(self._ledger):
                try:
                    await self._objects.delete_object(name)
                except RemoteError as exc:
                    report.failed[name] = str(exc)
                else:
                    report.deleted.append(name)
            self._ledger.clear()

        cleanup_error = report.error
        if cleanup_error:
            logger.warning("%s", cleanup_error)
        if run is not self._run or self._run.phase.busy:
            # another run started while the deletions were waiting on the lock
            return report

        run.summary = None
        run.raw = None
        run.progress = 0
        run.phase = WorkflowPhase.IDLE
        run.warning = str(cleanup_error) if cleanup_error else None
        return report

    async def aclose(self) -> None:
        if self._session is not None:
            await self._session.aclose()


_workflow: SummaryWorkflow | None = None


def configure_workflow(workflow: SummaryWorkflow) -> None:
    """Install the workflow served by the HTTP API."""

    global _workflow
    _workflow = workflow


def get_workflow() -> SummaryWorkflow:
    if _workflow is None:
        raise RuntimeError("workflow has not been configured")
    return _workflow
