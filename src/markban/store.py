"""HTTP client for the wiki content store.

The store exposes whole documents: GET /api/source/{path} returns the raw
markdown and POST /api/save/{path} replaces it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from markban.errors import FetchFailure, SaveFailure

logger = logging.getLogger(__name__)


class DocumentStore:
    """Async reader and writer for markdown documents."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        fetch_retries: int = 2,
        retry_backoff: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.fetch_retries = fetch_retries
        self.retry_backoff = retry_backoff
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    @classmethod
    def from_config(cls, config: dict[str, Any], **kwargs) -> DocumentStore:
        return cls(
            config["base_url"],
            timeout=config["timeout"],
            fetch_retries=config["fetch_retries"],
            retry_backoff=config["retry_backoff"],
            **kwargs,
        )

    async def __aenter__(self) -> DocumentStore:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _clean(path: str) -> str:
        return path.lstrip("/")

    async def fetch_source(self, path: str) -> str:
        """Return the current markdown of a document.

        Transport errors and server errors are retried with exponential
        backoff. Client errors fail at once.
        """
        path = self._clean(path)
        url = f"/api/source/{path}"
        attempt = 0
        while True:
            try:
                response = await self._client.get(url)
            except httpx.TimeoutException as exc:
                error = FetchFailure(f"timed out fetching {path}", path)
                cause: Exception | None = exc
            except httpx.RequestError as exc:
                error = FetchFailure(f"could not fetch {path}: {exc}", path)
                cause = exc
            else:
                if 200 <= response.status_code < 300:
                    return response.text
                error = FetchFailure(
                    f"fetching {path} failed with HTTP {response.status_code}",
                    path,
                    status=response.status_code,
                )
                cause = None
                if response.status_code < 500:
                    raise error

            if attempt >= self.fetch_retries:
                raise error from cause
            delay = self.retry_backoff * (2**attempt)
            attempt += 1
            logger.warning("%s, retrying in %.2fs (attempt %d/%d)", error, delay, attempt, self.fetch_retries)
            await asyncio.sleep(delay)

    async def save(self, path: str, text: str) -> None:
        """Replace a document's markdown. Never retried."""
        path = self._clean(path)
        try:
            response = await self._client.post(
                f"/api/save/{path}",
                content=text.encode("utf-8"),
                headers={"Content-Type": "text/markdown"},
            )
        except httpx.TimeoutException as exc:
            raise SaveFailure(f"timed out saving {path}", path) from exc
        except httpx.RequestError as exc:
            raise SaveFailure(f"could not save {path}: {exc}", path) from exc

        if not 200 <= response.status_code < 300:
            raise SaveFailure(
                f"saving {path} failed with HTTP {response.status_code}",
                path,
                status=response.status_code,
            )
        logger.info("saved %s (%d bytes)", path, len(text))
