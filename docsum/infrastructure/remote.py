"""HTTP plumbing shared by the remote object store and transform clients."""
from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from docsum.core.config import RemoteSettings
from docsum.core.errors import UNKNOWN_ERROR, RemoteError

from .audit import CallAuditLog

logger = logging.getLogger(__name__)


class RemoteSession:
    """Issues authenticated JSON requests and audits every one of them.

    Non-2xx responses and transport failures are both turned into the
    ``RemoteError`` subclass chosen by the caller. The audit entry is written
    before the outcome is inspected, so failed calls are logged as well.
    """

    def __init__(
        self,
        settings: RemoteSettings,
        audit_log: CallAuditLog,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._audit_log = audit_log
        self._client = http_client or httpx.AsyncClient(timeout=settings.timeout)
        self._owns_client = http_client is None

    @property
    def audit_log(self) -> CallAuditLog:
        return self._audit_log

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def url(self, *segments: str) -> str:
        path = "/".join(quote(segment, safe="") for segment in segments)
        return f"{self._settings.api_base}/{path}"

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text or None

    @staticmethod
    def _error_message(body: Any) -> str:
        if isinstance(body, dict):
            message = body.get("message")
            if message:
                return str(message)
        return UNKNOWN_ERROR

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    async def request(
        self,
        method: str,
        url: str,
        *,
        payload: dict[str, Any] | None = None,
        error_cls: type[RemoteError] = RemoteError,
    ) -> Any:
        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(method, url, headers=self._settings.headers, json=payload)
        except httpx.HTTPError as exc:
            detail = str(exc) or UNKNOWN_ERROR
            self._audit_log.record(method, url, payload, {"error": detail})
            logger.warning("%s %s failed before a response arrived: %s", method, url, detail)
            raise error_cls(detail, payload={"error": detail}) from exc

        body = self._decode_body(response)
        self._audit_log.record(method, url, payload, body, status_code=response.status_code)

        if not response.is_success:
            logger.warning("%s %s returned HTTP %s", method, url, response.status_code)
            raise error_cls(self._error_message(body), status_code=response.status_code, payload=body)
        return body

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "RemoteSession":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
