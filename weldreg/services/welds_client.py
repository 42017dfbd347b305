"""HTTP client for the weld registry API."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from weldreg.core.config import settings
from weldreg.models import WeldCreate, WeldRead, WeldUpdate

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Failed API call: HTTP status (0 for transport errors) plus server messages."""

    def __init__(self, status: int, messages: list[str]) -> None:
        self.status = status
        self.messages = messages
        super().__init__(f"API error {status}: {self.detail}")

    @property
    def detail(self) -> str:
        return ", ".join(self.messages)

    @property
    def is_not_found(self) -> bool:
        return self.status == 404

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        message: Any = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("message") or body.get("detail")
        if isinstance(message, list):
            messages = [str(item) for item in message]
        elif message:
            messages = [str(message)]
        else:
            messages = [response.reason_phrase or f"HTTP {response.status_code}"]
        return cls(response.status_code, messages)


def _wire(payload: WeldCreate | WeldUpdate | Mapping[str, Any], **dump_options: bool) -> dict[str, Any]:
    if isinstance(payload, (WeldCreate, WeldUpdate)):
        return payload.model_dump(mode="json", by_alias=True, **dump_options)
    return dict(payload)


class WeldsApiClient:
    """Thin wrapper around the ``/welds`` REST resource.

    Mapping payloads are sent as-is (camelCase keys) so the server stays the
    single source of validation; schema payloads are serialized by alias.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        http: httpx.Client | None = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout or settings.api_timeout
        self._http = http or httpx.Client(timeout=self.timeout)

    def close(self) -> None:
        self._http.close()

    def _request(
        self,
        method: str,
        path: str = "",
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self.base_url}/welds{path}"
        try:
            logger.debug("API Request: %s %s params=%s json=%s", method, url, params, json)
            response = self._http.request(method, url, params=params, json=json)
        except httpx.RequestError as exc:
            logger.error("API Connection Error: %s", exc)
            raise ApiError(0, [f"Failed to connect to API: {exc}"]) from exc

        if response.is_error:
            error = ApiError.from_response(response)
            logger.warning("API Error %s %s: %s", method, url, error.detail)
            raise error
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def list(
        self,
        search: Optional[str] = None,
        object_name: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[WeldRead]:
        params: dict[str, Any] = {}
        if search:
            params["search"] = search
        if object_name:
            params["objectName"] = object_name
        if page:
            params["page"] = page
        if limit:
            params["limit"] = limit
        data = self._request("GET", params=params)
        return [WeldRead.model_validate(item) for item in data or []]

    def get(self, weld_id: str) -> WeldRead:
        return WeldRead.model_validate(self._request("GET", f"/{weld_id}"))

    def create(self, payload: WeldCreate | Mapping[str, Any]) -> WeldRead:
        data = self._request("POST", json=_wire(payload, exclude_none=True))
        return WeldRead.model_validate(data)

    def update(self, weld_id: str, payload: WeldUpdate | Mapping[str, Any]) -> WeldRead:
        data = self._request("PATCH", f"/{weld_id}", json=_wire(payload, exclude_unset=True))
        return WeldRead.model_validate(data)

    def remove(self, weld_id: str) -> None:
        self._request("DELETE", f"/{weld_id}")


__all__ = ["ApiError", "WeldsApiClient"]
