from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Sequence, TextIO

import httpx

from docsum.application import SummaryWorkflow
from docsum.core.config import RemoteSettings, load_settings
from docsum.core.documents import ACCEPTED_EXTENSIONS, DocumentInput
from docsum.core.errors import SummarizerError
from docsum.core.logging import configure_logging
from docsum.domain import WorkflowPhase
from docsum.infrastructure import CallAuditLog, RemoteSession


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Summarize a document into two bullet points")
    parser.add_argument("path", type=Path, help=f"document to summarize ({', '.join(ACCEPTED_EXTENSIONS)})")
    parser.add_argument("--cleanup", action="store_true", help="delete the created remote objects afterwards")
    parser.add_argument("--show-raw", action="store_true", help="print the raw result envelope")
    parser.add_argument("--show-log", action="store_true", help="print every remote call that was made")
    return parser


async def summarize(
    args: argparse.Namespace,
    settings: RemoteSettings,
    *,
    out: TextIO,
    http_client: httpx.AsyncClient | None = None,
) -> int:
    session = RemoteSession(settings, CallAuditLog(), http_client=http_client)
    workflow = SummaryWorkflow.from_session(session)
    try:
        try:
            document = DocumentInput.from_path(args.path)
        except SummarizerError as exc:
            print(f"error: {exc}", file=out)
            return 1

        run = await workflow.start(document)
        if run.phase is WorkflowPhase.COMPLETED:
            print(run.summary, file=out)
            if args.show_raw:
                print(json.dumps(run.raw, indent=2, ensure_ascii=False), file=out)
        else:
            print(f"error: {run.error}", file=out)

        if args.cleanup:
            report = await workflow.cleanup()
            if report.error:
                print(f"warning: {report.error}", file=out)

        if args.show_log:
            for entry in workflow.call_log():
                print(json.dumps(entry.as_dict(), indent=2, ensure_ascii=False), file=out)

        return 0 if run.phase is WorkflowPhase.COMPLETED else 1
    finally:
        await workflow.aclose()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    configure_logging(settings.log_level, stream=sys.stderr)
    return asyncio.run(summarize(args, settings.remote, out=sys.stdout))
