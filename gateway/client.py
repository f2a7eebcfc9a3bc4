"""HTTP client for the receipts backend."""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple

import requests

from core.config import config as cfg
from core.logger import get_logger
from gateway.errors import ApiError

log = get_logger("gateway/client")


def _error_message(data: Any, response: requests.Response) -> str:
    if isinstance(data, dict):
        for key in ("error", "message"):
            if data.get(key):
                return str(data[key])
    return response.reason or f"HTTP {response.status_code}"


def unwrap_items(result: Any) -> Tuple[List[Dict[str, Any]], int]:
    """
    Normalize the backend's list responses.

    Accepts a bare list, ``{"items": [...], "total": n}`` or the older
    ``{"data": [...], "total": n}`` shape.

    Returns:
        (items, total)
    """
    if isinstance(result, list):
        return result, len(result)
    if isinstance(result, dict):
        for key in ("items", "data"):
            items = result.get(key)
            if isinstance(items, list):
                return items, int(result.get("total") or len(items))
    return [], 0


class ReceiptsApi:
    """
    Thin wrapper over the portal REST API.

    One method per endpoint; every call is a single blocking request with no
    retry. Authenticated calls take the bearer token explicitly.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        prefix: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or cfg.api_base_url).rstrip("/")
        self.prefix = cfg.api_prefix if prefix is None else prefix
        self.timeout = timeout or cfg.api_timeout_s
        self._http = session or requests.Session()

    def _request(
        self,
        path: str,
        method: str = "GET",
        token: Optional[str] = None,
        json: Optional[Any] = None,
        query: Optional[Dict[str, Any]] = None,
        raw_path: bool = False,
    ) -> Any:
        url = f"{self.base_url}{path if raw_path else self.prefix + path}"
        headers: Dict[str, str] = {}
        if json is not None:
            headers["Content-Type"] = "application/json"
        if token:
            headers["Authorization"] = f"Bearer {token}"
        params = {k: v for k, v in (query or {}).items() if v not in (None, "")} or None

        try:
            response = self._http.request(
                method,
                url,
                headers=headers,
                json=json,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.error(f"{method} {path} failed: {type(e).__name__}: {e}")
            raise ApiError(str(e) or type(e).__name__) from e

        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                data = response.json()
            except ValueError:
                data = response.text
        else:
            data = response.text

        if not response.ok:
            message = _error_message(data, response)
            log.warning(f"{method} {path} -> {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code, payload=data)

        log.debug(f"{method} {path} -> {response.status_code}")
        return data

    # Auth
    def login(self, emp_code: str, password: str) -> Dict[str, Any]:
        return self._request("/auth/login", method="POST", json={"emp_code": emp_code, "password": password})

    def register(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("/auth/register", method="POST", json=data)

    # Users
    def me(self, token: str) -> Dict[str, Any]:
        return self._request("/users/me", token=token)

    def list_users(self, token: str) -> Any:
        return self._request("/users", token=token)

    def create_user(self, token: str, data: Dict[str, Any]) -> Any:
        return self._request("/users", method="POST", token=token, json=data)

    def update_user(self, token: str, user_id: str, data: Dict[str, Any]) -> Any:
        return self._request(f"/users/{user_id}", method="PATCH", token=token, json=data)

    def change_password(self, token: str, user_id: str, password: str) -> Any:
        return self._request(f"/users/{user_id}/password", method="PATCH", token=token, json={"password": password})

    def delete_user(self, token: str, user_id: str) -> Any:
        return self._request(f"/users/{user_id}", method="DELETE", token=token)

    # Receipts
    def list_receipts(self, token: str, query: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("/receipts", token=token, query=query)

    def get_receipt(self, token: str, receipt_id: str) -> Any:
        return self._request(f"/receipts/{receipt_id}", token=token)

    def get_receipts_by_emp_code(self, token: str, emp_code: str, query: Optional[Dict[str, Any]] = None) -> Any:
        return self._request(f"/receipts/emp/{emp_code}", token=token, query=query)

    def create_receipt(self, token: str, payload: Dict[str, Any]) -> Any:
        return self._request("/receipts", method="POST", token=token, json=payload)

    def update_receipt(self, token: str, receipt_id: str, data: Dict[str, Any]) -> Any:
        return self._request(f"/receipts/{receipt_id}", method="PATCH", token=token, json=data)

    def delete_receipt(self, token: str, receipt_id: str, reason: str) -> Any:
        """Soft delete; the backend keeps the row with the given reason."""
        return self._request(f"/receipts/{receipt_id}", method="DELETE", token=token, json={"reason": reason})

    def restore_receipt(self, token: str, receipt_id: str) -> Any:
        return self._request(f"/receipts/{receipt_id}/restore", method="POST", token=token)

    def update_receipt_status(self, token: str, receipt_id: str, status: str) -> Any:
        return self._request(f"/receipts/{receipt_id}/status", method="PATCH", token=token, json={"status": status})

    # Customers
    def create_customer(self, token: str, data: Dict[str, Any]) -> Any:
        return self._request("/customers", method="POST", token=token, json=data)

    # Stats
    def stats_summary(self, token: str, query: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("/stats/summary", token=token, query=query)

    def stats_by_category(self, token: str, query: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("/stats/by-category", token=token, query=query)

    def stats_by_day(self, token: str, query: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("/stats/by-day", token=token, query=query)

    def health(self) -> Any:
        return self._request("/health", raw_path=True)
