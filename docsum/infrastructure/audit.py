"""Append-only record of every call made to the remote API."""
from __future__ import annotations

import itertools
from datetime import datetime, timezone
from typing import Any

from docsum.domain import CallLogEntry


class CallAuditLog:
    """In-memory audit trail; entries are never mutated, dropped or reordered."""

    def __init__(self) -> None:
        self._entries: list[CallLogEntry] = []
        self._sequence = itertools.count(1)

    def record(
        self,
        method: str,
        url: str,
        request: Any,
        response: Any,
        *,
        status_code: int | None = None,
    ) -> CallLogEntry:
        entry = CallLogEntry(
            sequence_id=next(self._sequence),
            method=method,
            url=url,
            request=request,
            response=response,
            timestamp=datetime.now(timezone.utc),
            status_code=status_code,
        )
        self._entries.append(entry)
        return entry

    def list(self) -> list[CallLogEntry]:
        return list(self._entries)

    def as_dicts(self) -> list[dict[str, Any]]:
        return [entry.as_dict() for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)
