from __future__ import annotations

import argparse
import io
import json

import httpx
import pytest

from docsum.cli import build_parser, summarize


def _args(path, *extra: str) -> argparse.Namespace:
    return build_parser().parse_args([str(path), *extra])


@pytest.mark.asyncio
async def test_summarize_prints_summary_and_cleans_up(tmp_path, remote, settings):
    document = tmp_path / "notes.txt"
    document.write_text("Plans for the next release.", encoding="utf-8")
    out = io.StringIO()
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(remote))

    code = await summarize(_args(document, "--cleanup"), settings, out=out, http_client=http_client)

    assert code == 0
    assert out.getvalue().splitlines()[:2] == remote.summary.splitlines()
    assert remote.calls("DELETE") == [
        ("DELETE", "/objects/uploaded_document"),
        ("DELETE", "/objects/document_summary"),
    ]
    await http_client.aclose()


@pytest.mark.asyncio
async def test_summarize_reports_remote_failure(tmp_path, remote, settings):
    document = tmp_path / "notes.txt"
    document.write_text("text", encoding="utf-8")
    remote.fail("POST", "/input_data", 401, {"message": "invalid token"})
    out = io.StringIO()
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(remote))

    code = await summarize(_args(document), settings, out=out, http_client=http_client)

    assert code == 1
    assert out.getvalue().strip() == "error: Failed to upload document: invalid token"
    await http_client.aclose()


@pytest.mark.asyncio
async def test_summarize_missing_file_makes_no_call(tmp_path, remote, settings):
    out = io.StringIO()
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(remote))

    code = await summarize(_args(tmp_path / "absent.txt"), settings, out=out, http_client=http_client)

    assert code == 1
    assert out.getvalue().strip() == "error: Failed to read file"
    assert remote.requests == []
    await http_client.aclose()


@pytest.mark.asyncio
async def test_summarize_show_log_prints_each_call(tmp_path, remote, settings):
    document = tmp_path / "notes.csv"
    document.write_text("a,b\n1,2\n", encoding="utf-8")
    out = io.StringIO()
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(remote))

    await summarize(_args(document, "--show-log"), settings, out=out, http_client=http_client)

    decoder = json.JSONDecoder()
    text = out.getvalue()
    start = text.index("{")
    entries = []
    while start < len(text):
        entry, end = decoder.raw_decode(text, start)
        entries.append(entry)
        start = end
        while start < len(text) and text[start].isspace():
            start += 1
    assert [entry["method"] for entry in entries] == ["POST", "POST", "GET"]
    await http_client.aclose()
