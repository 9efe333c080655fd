"""
Async client for the EMA public JSON data files.

EMA publishes each dataset as a static JSON report under one base URL.
Most reports are a bare array of rows; the document reports wrap the
array in a {"data": [...]} object.
"""

import asyncio
import json
import logging
from enum import Enum
from typing import Any, List, Optional

import httpx

from ...base import ExecutionError
from .types import EmaRecord

logger = logging.getLogger(__name__)

EMA_BASE_URL = "https://www.ema.europa.eu/en/documents/report"
REQUEST_TIMEOUT = 30.0
USER_AGENT = "EMA-MCP-Server/0.1.0"

DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "application/json",
}


class FetchMode(str, Enum):
    """Shape of the JSON report body."""
    ARRAY = "array"
    DOCUMENTS = "documents"


class EmaApiError(ExecutionError):
    """Base class for failures talking to the EMA data endpoints."""
    error_type = "request_error"


class EmaTimeoutError(EmaApiError):
    """The request did not complete within REQUEST_TIMEOUT."""
    error_type = "timeout"


class EmaHttpError(EmaApiError):
    """EMA answered with a non-success status code."""
    error_type = "http_error"

    def __init__(self, status: int, status_text: str, url: str = ""):
        self.status = status
        self.status_text = status_text
        super().__init__(
            f"EMA API request failed: HTTP {status} {status_text}".rstrip(),
            details={"status": status, "status_text": status_text, "url": url},
        )


class EmaNetworkError(EmaApiError):
    """The request was sent but no response arrived."""
    error_type = "network_error"


class EmaRequestError(EmaApiError):
    """Any other failure building or sending the request."""
    error_type = "request_error"


class InvalidResponseShapeError(EmaApiError):
    """The body was not the array (or data-wrapped array) we expected."""
    error_type = "invalid_response"


def build_url(endpoint: str, base_url: str = EMA_BASE_URL) -> str:
    """Join the fixed base URL and a report file name."""
    return f"{base_url.rstrip('/')}/{endpoint}"


def unwrap_records(payload: Any, mode: FetchMode, url: str = "") -> List[EmaRecord]:
    """
    Normalize a parsed report body into a list of rows.

    Raises InvalidResponseShapeError when the payload does not have the
    shape expected for the given mode.
    """
    if mode == FetchMode.DOCUMENTS:
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise InvalidResponseShapeError(
                "Invalid response format: expected an object with a 'data' array",
                details={"url": url},
            )
        return data

    if not isinstance(payload, list):
        raise InvalidResponseShapeError(
            "Invalid response format: expected a JSON array",
            details={"url": url},
        )
    return payload


class EmaClient:
    """
    Fetches EMA JSON reports.

    A new httpx.AsyncClient is opened per request; the client object itself
    holds no per-call state and is safe to share between concurrent calls.
    """

    def __init__(
        self,
        base_url: str = EMA_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    def url_for(self, endpoint: str) -> str:
        return build_url(endpoint, self.base_url)

    async def fetch(self, endpoint: str) -> List[EmaRecord]:
        """Fetch a report whose body is a bare JSON array."""
        return await self.fetch_records(endpoint, FetchMode.ARRAY)

    async def fetch_documents(self, endpoint: str) -> List[EmaRecord]:
        """Fetch a document report whose rows sit under a 'data' key."""
        return await self.fetch_records(endpoint, FetchMode.DOCUMENTS)

    async def fetch_records(self, endpoint: str, mode: FetchMode) -> List[EmaRecord]:
        url = self.url_for(endpoint)
        payload = await self._get_json(url)
        records = unwrap_records(payload, mode, url)
        logger.info(f"Fetched {len(records)} records from {url}")
        return records

    async def _get_json(self, url: str) -> Any:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers=DEFAULT_HEADERS,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                # httpx bounds each phase separately; bound the whole request too
                response = await asyncio.wait_for(client.get(url), self.timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise EmaTimeoutError(
                f"EMA API request timed out after {self.timeout:g} seconds",
                details={"url": url},
            ) from e
        except (httpx.NetworkError, httpx.RemoteProtocolError) as e:
            raise EmaNetworkError(
                f"EMA API request failed: no response received ({e})",
                details={"url": url},
            ) from e
        except httpx.HTTPError as e:
            raise EmaRequestError(
                f"EMA API request failed: {e}",
                details={"url": url},
            ) from e

        if not response.is_success:
            raise EmaHttpError(response.status_code, response.reason_phrase, url)

        try:
            payload = response.json()
            # Some reports are served as a JSON-encoded string
            if isinstance(payload, str):
                payload = json.loads(payload)
        except ValueError as e:
            raise InvalidResponseShapeError(
                f"Invalid response format: body is not valid JSON ({e})",
                details={"url": url},
            ) from e

        return payload
