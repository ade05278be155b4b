from __future__ import annotations

import json
from typing import Any, Dict, Optional

import httpx


class ServiceError(Exception):
    """A failed call to one of the Watson services.

    ``code`` is the HTTP status of the failed response, or 500 when no response
    was received. ``body`` is the service's error payload as returned.
    """

    def __init__(self, message: str, code: int = 500, body: Any = None):
        super().__init__(message)
        self.code = code or 500
        self.body = body

    def to_body(self) -> Any:
        if self.body is not None:
            return self.body
        return {"code": self.code, "error": str(self)}

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ServiceError":
        try:
            body = response.json()
        except (json.JSONDecodeError, ValueError):
            body = None
        message = None
        if isinstance(body, dict):
            message = body.get("error") or body.get("description")
        if not message:
            message = response.text.strip() or response.reason_phrase
        return cls(str(message), code=response.status_code, body=body)


class WatsonClient:
    """Shared plumbing for the Assistant and Discovery v1 REST APIs.

    Every call carries the ``version`` query parameter and basic auth with the
    ``apikey`` user. Non-2xx answers and transport failures raise ServiceError.
    """

    def __init__(
        self,
        base_url: str,
        version: str,
        apikey: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        auth = ("apikey", apikey) if apikey else None
        self.version = version
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            auth=auth,
            timeout=timeout,
            transport=transport,
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        query = {"version": self.version}
        if params:
            query.update(params)
        try:
            response = await self._client.request(method, path, params=query, **kwargs)
        except httpx.HTTPError as exc:
            raise ServiceError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            raise ServiceError.from_response(response)
        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            raise ServiceError(f"{method} {path} returned invalid JSON") from exc

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        await self._client.aclose()
