"""Prediction API client.

Thin async wrapper around httpx that attaches the bearer token, logs every
call, and normalizes every failure (network, timeout, non-2xx, malformed
body) into ApiClientError carrying an ApiError.

No retries: a failed call is reported once and the caller decides what to do.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
from loguru import logger

from strength_compass.config.settings import settings
from strength_compass.core.constants import MOCK_ENDPOINT_PREFIXES
from strength_compass.core.errors import ApiClientError
from strength_compass.integrations.predictor.tokens import TokenStore
from strength_compass.schemas.api import ApiEnvelope, ApiError


def _is_mock_endpoint(url: str) -> bool:
    return any(prefix in url for prefix in MOCK_ENDPOINT_PREFIXES)


class ApiClient:
    """Async client for the prediction API.

    Use as an async context manager, or call aclose() when done.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        token_store: TokenStore | None = None,
        on_unauthorized: Callable[[], None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the API client.

        Args:
            base_url: API root. If not provided, reads API_BASE_URL from settings.
            timeout: Fixed request timeout in seconds. Defaults to API_TIMEOUT_SECONDS.
            token_store: Where the bearer token is read from (and cleared on 401).
            on_unauthorized: Called after a 401 from a real endpoint clears the token,
                             e.g. to send the user back to the login screen.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.token_store = token_store or TokenStore()
        self._on_unauthorized = on_unauthorized
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.api_timeout_seconds,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        token = self.token_store.token
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    async def _request(
        self,
        method: str,
        url: str,
        *,
        json: Any | None = None,
        params: dict[str, Any] | None = None,
    ) -> ApiEnvelope:
        logger.debug(f"API Request: {method} {url}", data=json, params=params)

        try:
            response = await self._client.request(method, url, json=json, params=params, headers=self._headers())
        except httpx.TimeoutException as e:
            raise self._fail(url, ApiError(code="TIMEOUT", message=str(e) or "Request timed out", details={})) from e
        except httpx.RequestError as e:
            raise self._fail(
                url,
                ApiError(code="NETWORK_ERROR", message=str(e) or "Network request failed", details={}),
            ) from e

        if response.is_error:
            if response.status_code == httpx.codes.UNAUTHORIZED and not _is_mock_endpoint(url):
                self._handle_unauthorized()
            raise self._fail(url, self._format_http_error(response))

        logger.debug(f"API Response: {response.status_code} {url}")

        try:
            return ApiEnvelope.model_validate(response.json())
        except ValueError as e:
            raise self._fail(
                url,
                ApiError(
                    code="INVALID_RESPONSE",
                    message="Response body is not a valid API envelope",
                    details={"status": response.status_code},
                ),
            ) from e

    def _handle_unauthorized(self) -> None:
        logger.warning("Unauthorized access - clearing auth token")
        self.token_store.clear_token()
        if self._on_unauthorized is not None:
            self._on_unauthorized()

    @staticmethod
    def _format_http_error(response: httpx.Response) -> ApiError:
        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}

        details = body.get("details")
        return ApiError(
            code=body.get("code") or f"HTTP_{response.status_code}",
            message=body.get("message") or body.get("error") or response.reason_phrase or "An unexpected error occurred",
            details={"status": response.status_code, **(details if isinstance(details, dict) else {})},
        )

    @staticmethod
    def _fail(url: str, error: ApiError) -> ApiClientError:
        logger.error(f"API Error: {error.code} {url}", status=error.details.get("status"), error_message=error.message)
        return ApiClientError(error)

    async def get(self, url: str, params: dict[str, Any] | None = None) -> ApiEnvelope:
        return await self._request("GET", url, params=params)

    async def post(self, url: str, data: Any | None = None) -> ApiEnvelope:
        return await self._request("POST", url, json=data)

    async def put(self, url: str, data: Any | None = None) -> ApiEnvelope:
        return await self._request("PUT", url, json=data)

    async def patch(self, url: str, data: Any | None = None) -> ApiEnvelope:
        return await self._request("PATCH", url, json=data)

    async def delete(self, url: str) -> ApiEnvelope:
        return await self._request("DELETE", url)

    async def health_check(self) -> bool:
        """Return True if GET /health succeeds. Never raises."""
        try:
            await self.get("/health")
        except ApiClientError:
            return False
        return True
