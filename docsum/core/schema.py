"""Request and response envelopes of the remote text-processing API."""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class InputDataRequest(BaseModel):
    created_object_name: str = Field(min_length=1)
    data_type: Literal["strings"] = "strings"
    input_data: list[str]


class PromptInput(BaseModel):
    input_object_name: str = Field(min_length=1)
    mode: str = "combine_events"


class ApplyPromptRequest(BaseModel):
    created_object_names: list[str] = Field(min_length=1)
    prompt_string: str
    inputs: list[PromptInput]


class ReturnDataResponse(BaseModel):
    """Only ``text_value`` is relied upon; every other field is kept verbatim."""

    model_config = ConfigDict(extra="allow")

    text_value: str


class FetchedObject(BaseModel):
    text_value: str
    raw: dict[str, Any] = Field(default_factory=dict)
