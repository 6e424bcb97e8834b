"""Client for server-side templated transforms over stored objects."""
from __future__ import annotations

import logging
from typing import Any, Iterable

from docsum.core.errors import TransformError
from docsum.core.schema import ApplyPromptRequest, PromptInput

from .remote import RemoteSession

logger = logging.getLogger(__name__)

COMBINE_EVENTS = "combine_events"


class TransformClient:
    def __init__(self, session: RemoteSession) -> None:
        self._session = session

    async def apply_transform(
        self,
        output_name: str,
        template: str,
        inputs: Iterable[tuple[str, str]],
    ) -> Any:
        """Ask the service to render ``template`` over ``inputs`` into ``output_name``.

        ``inputs`` holds ``(object_name, combine_mode)`` pairs. Placeholders in
        the template are substituted by the service, never locally. The output
        object materialises asynchronously, so the returned body must not be
        treated as the result; read it back with ``fetch_object``.
        """

        request = ApplyPromptRequest(
            created_object_names=[output_name],
            prompt_string=template,
            inputs=[PromptInput(input_object_name=name, mode=mode) for name, mode in inputs],
        )
        body = await self._session.request(
            "POST",
            self._session.url("apply_prompt"),
            payload=request.model_dump(),
            error_cls=TransformError,
        )
        logger.info("Applied transform into %s", output_name)
        return body
