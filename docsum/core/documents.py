"""In-memory document input handed to the summarization workflow.

Documents are never parsed locally. Whatever the extension, the raw bytes are
decoded as UTF-8 text (undecodable bytes become replacement characters) and
forwarded to the remote service unchanged.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from docsum.core.errors import DocumentReadError

logger = logging.getLogger(__name__)

ACCEPTED_EXTENSIONS: tuple[str, ...] = (".txt", ".csv", ".pdf", ".docx", ".xls", ".xlsx")


def is_accepted_extension(filename: str) -> bool:
    return Path(filename).suffix.lower() in ACCEPTED_EXTENSIONS


@dataclass(frozen=True, slots=True)
class DocumentInput:
    filename: str
    content: bytes
    content_type: str | None = None

    @classmethod
    def from_path(cls, path: Path) -> "DocumentInput":
        try:
            payload = path.read_bytes()
        except OSError as exc:
            raise DocumentReadError("Failed to read file") from exc
        return cls(filename=path.name, content=payload)

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def accepted(self) -> bool:
        return is_accepted_extension(self.filename)

    def read_text(self) -> str:
        if not self.accepted:
            logger.warning("Forwarding %s although its extension is not in the accepted list", self.filename)
        return self.content.decode("utf-8", errors="replace")


__all__ = ["ACCEPTED_EXTENSIONS", "DocumentInput", "is_accepted_extension"]
