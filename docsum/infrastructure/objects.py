"""Client for the remote key/value object namespace."""
from __future__ import annotations

import logging
from typing import Sequence

from pydantic import ValidationError as SchemaValidationError

from docsum.core.errors import RemoteDeleteError, RemoteReadError, RemoteWriteError
from docsum.core.schema import FetchedObject, InputDataRequest, ReturnDataResponse

from .remote import RemoteSession

logger = logging.getLogger(__name__)


class ObjectStoreClient:
    """Creates, reads and deletes named objects held by the remote service."""

    def __init__(self, session: RemoteSession) -> None:
        self._session = session

    async def create_object(self, name: str, values: Sequence[str]) -> None:
        """Bind ``name`` to the ordered ``values``; raises :class:`RemoteWriteError`."""

        request = InputDataRequest(created_object_name=name, input_data=list(values))
        await self._session.request(
            "POST",
            self._session.url("input_data"),
            payload=request.model_dump(),
            error_cls=RemoteWriteError,
        )
        logger.info("Created remote object %s", name)

    async def fetch_object(self, name: str) -> FetchedObject:
        """Return the value bound to ``name``; raises :class:`RemoteReadError`."""

        body = await self._session.request(
            "GET",
            self._session.url("return_data", name),
            error_cls=RemoteReadError,
        )
        try:
            envelope = ReturnDataResponse.model_validate(body)
        except SchemaValidationError as exc:
            raise RemoteReadError("response did not contain text_value", payload=body) from exc
        return FetchedObject(text_value=envelope.text_value, raw=dict(body))

    async def delete_object(self, name: str) -> None:
        """Remove ``name``; raises :class:`RemoteDeleteError`."""

        await self._session.request(
            "DELETE",
            self._session.url("objects", name),
            error_cls=RemoteDeleteError,
        )
        logger.info("Deleted remote object %s", name)
