"""HTTP client for the package platform REST API.

Every platform response is wrapped in an envelope ``{code, msg, data}``
where ``code == 0`` means success. This client unwraps successful
envelopes and turns everything else into the shared error taxonomy, so
callers never have to inspect status codes or envelope discriminants.
"""

from __future__ import annotations

from typing import Any

import httpx

from infrastructure.observability import (
    DefaultPlatformClientProbe,
    PlatformClientProbe,
)
from shared_kernel.exceptions import (
    ConflictError,
    NetworkFailureError,
    NotFoundError,
    PlatformError,
)

SUCCESS_CODE = 0
NOT_FOUND_CODE = 404

# Rejections the platform reports as plain errors (HTTP 500, code 1) that
# still mean "this already exists" or "another target is already active".
CONFLICT_MARKERS = ("already exists", "already active", "已存在", "已有激活")


class PlatformClient:
    """Async client for the platform API with envelope decoding.

    Requests are never retried: authorization mutations must not be
    replayed blindly, so a transport failure is reported to the caller
    and any retry is left to an explicit user action.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        access_token: str | None = None,
        verify_tls: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
        probe: PlatformClientProbe | None = None,
    ):
        """Initialize the platform client.

        Args:
            base_url: Base URL including the API prefix
                (e.g., "http://localhost:8080/api/v1")
            timeout_seconds: Per-request timeout
            access_token: Optional bearer token
            verify_tls: Verify TLS certificates
            transport: Optional httpx transport (used by tests)
            probe: Optional domain probe for observability
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._access_token = access_token or None
        self._verify_tls = verify_tls
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._probe = probe or DefaultPlatformClientProbe()

    @property
    def _request_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._access_token is not None:
            headers["Authorization"] = f"Bearer {self._access_token}"
        return headers

    def _ensure_client(self) -> httpx.AsyncClient:
        """Lazily create the underlying httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=self._request_headers,
                timeout=self._timeout,
                verify=self._verify_tls,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> PlatformClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Issue a GET and return the envelope's ``data``."""
        return await self._request("GET", path, params=params)

    async def post(self, path: str, json: dict[str, Any] | None = None) -> Any:
        """Issue a POST and return the envelope's ``data``."""
        return await self._request("POST", path, json=json)

    async def put(self, path: str, json: dict[str, Any] | None = None) -> Any:
        """Issue a PUT and return the envelope's ``data``."""
        return await self._request("PUT", path, json=json)

    async def delete(self, path: str, json: dict[str, Any] | None = None) -> Any:
        """Issue a DELETE (optionally with a JSON body) and return ``data``."""
        return await self._request("DELETE", path, json=json)

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        client = self._ensure_client()
        try:
            response = await client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            self._probe.transport_failed(method=method, path=path, error=e)
            raise NetworkFailureError(
                f"Could not reach the platform ({method} {path}): {e}"
            ) from e

        return self._decode(method, path, response)

    def _decode(self, method: str, path: str, response: httpx.Response) -> Any:
        """Unwrap an envelope or raise the matching typed failure."""
        body = _parse_envelope(response)
        code = body.get("code") if body is not None else None
        message = str(body.get("msg") or "") if body is not None else ""

        if response.is_success and code == SUCCESS_CODE:
            self._probe.request_succeeded(
                method=method, path=path, status_code=response.status_code
            )
            return body.get("data")

        if not message:
            message = f"Platform request failed: HTTP {response.status_code}"

        self._probe.request_rejected(
            method=method,
            path=path,
            status_code=response.status_code,
            code=code,
            message=message,
        )

        if response.status_code == httpx.codes.NOT_FOUND or code == NOT_FOUND_CODE:
            raise NotFoundError(message)
        if response.status_code == httpx.codes.CONFLICT or _is_conflict(message):
            raise ConflictError(message)
        raise PlatformError(message, code=code)


def _is_conflict(message: str) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in CONFLICT_MARKERS)


def _parse_envelope(response: httpx.Response) -> dict[str, Any] | None:
    """Return the envelope dict, or None if the body is not one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict) or "code" not in body:
        return None
    return body
