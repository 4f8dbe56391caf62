"""Tests for the remote render client."""

from __future__ import annotations

import json

import httpx
import pytest

from fce_synthesis.assembler import Block, BlockKind, DocumentModel, Section
from fce_synthesis.core.config import RenderServiceConfig
from fce_synthesis.exceptions import RenderRejectedError, RenderServiceUnavailableError
from fce_synthesis.formatters import RemoteRenderClient

_DOCUMENT = DocumentModel(
    title="FCE Executive Summary",
    sections=[
        Section(key="notes", title="Notes", blocks=[Block(kind=BlockKind.PARAGRAPH, text="ok")]),
    ],
)


def _client(handler, **config) -> RemoteRenderClient:
    http = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://render.test")
    return RemoteRenderClient(RenderServiceConfig(base_url="http://render.test", **config), client=http)


class TestRemoteRenderClient:
    def test_returns_rendered_bytes(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"DOCX-BYTES")

        assert _client(handler).render(_DOCUMENT) == b"DOCX-BYTES"
        request = seen[0]
        assert request.url.path == "/generate-executive-summary"
        body = json.loads(request.content)
        assert body["document"]["title"] == "FCE Executive Summary"
        assert "authorization" not in request.headers

    def test_sends_bearer_token_and_extra_fields(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"x")

        _client(handler, api_key="secret").render(_DOCUMENT, format="docx")
        assert seen[0].headers["authorization"] == "Bearer secret"
        assert json.loads(seen[0].content)["format"] == "docx"

    def test_client_error_is_rejection(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(422, text="missing claimant")

        with pytest.raises(RenderRejectedError) as info:
            _client(handler).render(_DOCUMENT)
        assert info.value.status_code == 422
        assert info.value.detail == "missing claimant"

    def test_server_error_is_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)

        with pytest.raises(RenderServiceUnavailableError):
            _client(handler).render(_DOCUMENT)

    def test_transport_error_is_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RenderServiceUnavailableError, match="unreachable"):
            _client(handler).render(_DOCUMENT)

    def test_injected_client_left_open(self) -> None:
        http = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        with RemoteRenderClient(client=http):
            pass
        assert http.is_closed is False

    def test_owned_client_closed_on_exit(self) -> None:
        with RemoteRenderClient(RenderServiceConfig(base_url="http://render.test")) as client:
            inner = client._client
        assert inner.is_closed is True
