# client.py
#
# HTTP client for the question store endpoint (?action=load|save|info).
# Any non-2xx status or a `success: false` body is raised as StoreClientError.

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)

STORE_PATH = "/api"


class StoreClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _jsonable(q: Any) -> Any:
    if isinstance(q, BaseModel):
        return q.model_dump(by_alias=True, mode="json")
    return q


class StoreClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        http: Optional[httpx.Client] = None,
    ):
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self._api_key = api_key

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "StoreClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _call(self, method: str, action: str, payload: Any = None) -> Dict[str, Any]:
        headers = {"x-api-key": self._api_key} if self._api_key else {}
        try:
            r = self._http.request(
                method, STORE_PATH, params={"action": action}, json=payload, headers=headers
            )
        except httpx.HTTPError as e:
            raise StoreClientError(f"Store unreachable: {e}") from e

        try:
            data = r.json()
        except ValueError as e:
            raise StoreClientError(
                f"Store returned non-JSON response ({r.status_code})", r.status_code
            ) from e

        if not isinstance(data, dict):
            raise StoreClientError("Store returned an unexpected response", r.status_code)
        if r.is_error or data.get("success") is not True:
            message = data.get("error") or data.get("detail") or f"HTTP {r.status_code}"
            raise StoreClientError(str(message), r.status_code)
        return data

    def info(self) -> Dict[str, Any]:
        return self._call("GET", "info")

    def is_available(self) -> bool:
        try:
            self.info()
        except StoreClientError as e:
            logger.info("Question store not available: %s", e)
            return False
        return True

    def load(self) -> List[Any]:
        return self._call("GET", "load").get("questions") or []

    def save(self, questions: Iterable[Any]) -> Dict[str, Any]:
        return self._call("POST", "save", [_jsonable(q) for q in questions])
