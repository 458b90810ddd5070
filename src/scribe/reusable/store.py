"""Remote persistence for reusable blocks.

``ReusableBlockStore`` is the narrow interface the gateway talks to;
``HttpReusableBlockStore`` implements it against the REST API with:
- Retry with exponential backoff for transient failures
- Structured ``{code, message}`` errors taken from the API's error body
- Validation of every record the API returns
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import quote

import httpx
import tenacity
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from ..config import RETRY, TIMEOUTS
from ..errors import TransportError
from ..settings import settings

logger = logging.getLogger(__name__)


class RemoteReusableBlock(BaseModel):
    """A reusable block record as stored remotely.

    ``content`` holds exactly one comment-delimited block.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    name: str = ""
    content: str


class ReusableBlockStore(ABC):
    """Remote collection of reusable block records."""

    @abstractmethod
    async def fetch_all(self) -> list[RemoteReusableBlock]:
        """Every record in the collection, in the order the store returns them."""

    @abstractmethod
    async def fetch_one(self, id: str) -> RemoteReusableBlock:
        """The record addressed by ``id``."""

    @abstractmethod
    async def save(self, record: RemoteReusableBlock) -> None:
        """Create or replace ``record``."""


# =============================================================================
# Retry Configuration
# =============================================================================


class _RetryableStatus(Exception):
    def __init__(self, response: httpx.Response) -> None:
        super().__init__(f"HTTP {response.status_code}")
        self.response = response


def _is_retryable_exception(exc: BaseException) -> bool:
    """Check if an exception should trigger a retry."""
    return isinstance(exc, (httpx.TimeoutException, httpx.ConnectError, _RetryableStatus))


def _retrying() -> tenacity.AsyncRetrying:
    return tenacity.AsyncRetrying(
        stop=tenacity.stop_after_attempt(RETRY.MAX_ATTEMPTS),
        wait=tenacity.wait_exponential(multiplier=1, min=RETRY.WAIT_MIN, max=RETRY.WAIT_MAX),
        retry=tenacity.retry_if_exception(_is_retryable_exception),
        before_sleep=lambda retry_state: logger.debug(
            "Retrying reusable block request (attempt %d) after error: %s",
            retry_state.attempt_number,
            retry_state.outcome.exception() if retry_state.outcome else "unknown",
        ),
        reraise=True,
    )


# =============================================================================
# HTTP Store
# =============================================================================


def _error_from_response(response: httpx.Response) -> TransportError:
    """Build a TransportError from an error status.

    Only an API error body ``{code, message}`` with a string ``code`` makes
    the error structured; any other body leaves ``code`` unset.
    """
    status = response.status_code
    recoverable = status in RETRY.RETRY_STATUSES
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("code"), str):
        return TransportError(
            body.get("message") or response.reason_phrase or body["code"],
            code=body["code"],
            status=status,
            recoverable=recoverable,
        )
    return TransportError(
        f"Request failed with status {status} {response.reason_phrase}".rstrip(),
        reason=f"http_{status}",
        status=status,
        recoverable=recoverable,
    )


class HttpReusableBlockStore(ReusableBlockStore):
    """Reusable block collection served by the REST API.

    Args:
        base_url: API root, e.g. ``https://example.org/wp-json/wp/v2``.
        token: Optional bearer token.
        client: Pre-built client to use; the store will not close it.
        path: Collection path below ``base_url``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        token: str | None = None,
        client: httpx.AsyncClient | None = None,
        path: str | None = None,
    ) -> None:
        self._base_url = (base_url or settings.api_url).rstrip("/")
        self._path = (path or settings.reusable_blocks_path).strip("/")
        self._owns_client = client is None
        if client is None:
            headers: dict[str, str] = {"Accept": "application/json"}
            token = token if token is not None else settings.api_token
            if token:
                headers["Authorization"] = f"Bearer {token}"
            client = httpx.AsyncClient(
                headers=headers,
                timeout=httpx.Timeout(TIMEOUTS.HTTP_REQUEST, connect=TIMEOUTS.HTTP_CONNECT),
            )
        self._client = client

    @property
    def collection_url(self) -> str:
        return f"{self._base_url}/{self._path}"

    def _item_url(self, id: str) -> str:
        return f"{self.collection_url}/{quote(id, safe='')}"

    async def __aenter__(self) -> HttpReusableBlockStore:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_all(self) -> list[RemoteReusableBlock]:
        payload = await self._request("GET", self.collection_url)
        if not isinstance(payload, list):
            raise TransportError("Expected a list of reusable blocks", reason="invalid_response")
        return [self._record(item) for item in payload]

    async def fetch_one(self, id: str) -> RemoteReusableBlock:
        payload = await self._request("GET", self._item_url(id))
        return self._record(payload)

    async def save(self, record: RemoteReusableBlock) -> None:
        await self._request(
            "PUT",
            self._item_url(record.id),
            json=record.model_dump(),
        )

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            async for attempt in _retrying():
                with attempt:
                    response = await self._client.request(method, url, **kwargs)
                    if response.status_code in RETRY.RETRY_STATUSES:
                        raise _RetryableStatus(response)
        except _RetryableStatus as exc:
            raise _error_from_response(exc.response) from exc
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Request to {url} timed out",
                reason="timeout",
                recoverable=True,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Cannot reach {url}: {exc}",
                reason="network_error",
                recoverable=True,
            ) from exc

        if response.is_error:
            raise _error_from_response(response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError("Response is not valid JSON", reason="invalid_response") from exc

    @staticmethod
    def _record(payload: Any) -> RemoteReusableBlock:
        try:
            return RemoteReusableBlock.model_validate(payload)
        except PydanticValidationError as exc:
            raise TransportError(
                f"Malformed reusable block record: {exc.error_count()} error(s)",
                reason="invalid_response",
            ) from exc
