"""Client for the remote document-generation service.

The finished document model is POSTed as JSON; the service answers with
the rendered file.  There is no retry policy here: callers that want
retries wrap :meth:`RemoteRenderClient.render`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from fce_synthesis.assembler.models import DocumentModel
from fce_synthesis.core.config import RenderServiceConfig
from fce_synthesis.exceptions import RenderRejectedError, RenderServiceUnavailableError
from fce_synthesis.formatters.json_formatter import document_to_dict

log = logging.getLogger(__name__)

_MAX_DETAIL_CHARS = 500


class RemoteRenderClient:
    """Sends a :class:`DocumentModel` to the render service and returns the bytes.

    Args:
        config: Service location, timeout, and optional API key.
        client: Pre-built ``httpx.Client`` (tests inject one with a mock transport).
    """

    def __init__(
        self,
        config: RenderServiceConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._config = config or RenderServiceConfig()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=self._config.base_url,
            timeout=self._config.timeout,
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"
        return headers

    def render(self, document: DocumentModel, **extra: Any) -> bytes:
        """Render *document* remotely.

        Raises:
            RenderServiceUnavailableError: The service could not be reached,
                timed out, or answered with a 5xx status.
            RenderRejectedError: The service refused the payload (4xx).
        """
        payload = {"document": document_to_dict(document), **extra}
        try:
            response = self._client.post(
                self._config.endpoint,
                json=payload,
                headers=self._headers(),
            )
        except httpx.TransportError as exc:
            log.error("Render service unreachable at %s: %s", self._config.base_url, exc)
            raise RenderServiceUnavailableError(f"Render service unreachable: {exc}") from exc

        status = response.status_code
        if status >= 500:
            log.error("Render service failed with HTTP %d", status)
            raise RenderServiceUnavailableError(f"Render service returned HTTP {status}")
        if status >= 400:
            detail = response.text[:_MAX_DETAIL_CHARS]
            log.error("Render service rejected document (HTTP %d): %s", status, detail)
            raise RenderRejectedError(
                f"Render service rejected the document (HTTP {status})",
                status_code=status,
                detail=detail,
            )

        log.info("Rendered document %r (%d bytes)", document.title, len(response.content))
        return response.content

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> RemoteRenderClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
