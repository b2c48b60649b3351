"""Tests for waypost.server.sender — Response to ASGI messages."""

import pytest

from waypost.http.response import Response, redirect
from waypost.server.sender import send_response


async def _send(response: Response) -> list[dict]:
    messages: list[dict] = []

    async def send(message: dict) -> None:
        messages.append(message)

    await send_response(response, send)
    return messages


class TestSendResponse:
    async def test_start_then_body(self) -> None:
        messages = await _send(Response("ok"))
        assert [m["type"] for m in messages] == ["http.response.start", "http.response.body"]
        assert messages[0]["status"] == 200
        assert messages[1]["body"] == b"ok"

    async def test_content_length_counts_bytes(self) -> None:
        messages = await _send(Response("café"))
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"5"
        assert headers[b"content-type"] == b"text/html; charset=utf-8"

    async def test_header_names_lowercased(self) -> None:
        messages = await _send(redirect("/en", 301))
        assert (b"location", b"/en") in messages[0]["headers"]
        assert messages[0]["status"] == 301

    @pytest.mark.parametrize("status", [101, 204, 304])
    async def test_no_body_statuses(self, status: int) -> None:
        messages = await _send(Response("unexpected-body").with_status(status))
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""
