from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable

import httpx
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from docsum.core.config import RemoteSettings
from docsum.infrastructure import CallAuditLog, RemoteSession

API_BASE = "https://remote.test/api_tools"


class FakeRemoteService:
    """Stand-in for the remote text-processing API behind ``httpx.MockTransport``."""

    def __init__(self, summary: str = "- Topic one\n- Topic two") -> None:
        self.summary = summary
        self.objects: dict[str, list[str]] = {}
        self.requests: list[httpx.Request] = []
        self.failures: dict[tuple[str, str], httpx.Response] = {}
        self.hooks: dict[tuple[str, str], Callable[[], Awaitable[None]]] = {}

    def fail(self, method: str, path: str, status_code: int = 500, body: Any = None) -> None:
        self.failures[(method, path)] = httpx.Response(status_code, json=body if body is not None else {})

    def calls(self, method: str | None = None) -> list[tuple[str, str]]:
        collected = [(request.method, request.url.path.removeprefix("/api_tools")) for request in self.requests]
        if method is None:
            return collected
        return [item for item in collected if item[0] == method]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api_tools")
        key = (request.method, path)

        hook = self.hooks.get(key)
        if hook is not None:
            await hook()

        if key in self.failures:
            return self.failures[key]

        if key == ("POST", "/input_data"):
            body = json.loads(request.content)
            self.objects[body["created_object_name"]] = list(body["input_data"])
            return httpx.Response(200, json={"status": "ok", "created": body["created_object_name"]})
        if key == ("POST", "/apply_prompt"):
            body = json.loads(request.content)
            for name in body["created_object_names"]:
                self.objects[name] = [self.summary]
            return httpx.Response(200, json={"status": "queued"})
        if request.method == "GET" and path.startswith("/return_data/"):
            name = path.rsplit("/", 1)[-1]
            if name not in self.objects:
                return httpx.Response(404, json={"message": f"{name} not found"})
            return httpx.Response(200, json={"text_value": "\n".join(self.objects[name]), "object_name": name})
        if request.method == "DELETE" and path.startswith("/objects/"):
            name = path.rsplit("/", 1)[-1]
            self.objects.pop(name, None)
            return httpx.Response(200, json={"deleted": name})
        return httpx.Response(404, json={"message": "unknown route"})


@pytest.fixture()
def remote() -> FakeRemoteService:
    return FakeRemoteService()


@pytest.fixture()
def settings() -> RemoteSettings:
    return RemoteSettings(api_base=API_BASE, api_token="secret-token", app_id="app-123")


@pytest.fixture()
def audit_log() -> CallAuditLog:
    return CallAuditLog()


@pytest.fixture()
def session(remote, settings, audit_log) -> RemoteSession:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(remote))
    return RemoteSession(settings, audit_log, http_client=http_client)
