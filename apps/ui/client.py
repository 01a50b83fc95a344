from __future__ import annotations

from typing import Any

import httpx

from core.config import settings


class PortalAPIError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PortalClient:
    """Thin httpx wrapper over the portal API; surfaces the envelope message on failure."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout_s: float = 10,
        transport: httpx.BaseTransport | None = None,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.Client(
            base_url=(base_url or settings.API_BASE_URL).rstrip("/"),
            headers=headers,
            timeout=timeout_s,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> PortalClient:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _call(self, method: str, url: str, **kwargs) -> dict[str, Any]:
        try:
            r = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise PortalAPIError(f"API unreachable: {e}") from e
        try:
            body = r.json()
        except ValueError:
            body = {}
        if r.is_error or not body.get("success", False):
            raise PortalAPIError(body.get("message") or f"HTTP {r.status_code}", r.status_code)
        return body

    # auth
    def login(self, email: str, password: str) -> dict[str, Any]:
        return self._call("POST", "/auth/login", json={"email": email, "password": password})

    def verify(self) -> dict[str, Any]:
        return self._call("GET", "/auth/verify")["user"]

    # students
    def list_students(
        self, status: str = "all", search: str = "", show_disabled: bool = False
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"showDisabled": str(show_disabled).lower()}
        if status and status != "all":
            params["status"] = status
        if search.strip():
            params["search"] = search.strip()
        return self._call("GET", "/students", params=params)["data"]

    def register_student(self, fields: dict[str, Any]) -> dict[str, Any]:
        return self._call("POST", "/students", json=fields)["data"]

    def update_status(self, student_id: str, status: str) -> dict[str, Any]:
        return self._call("PATCH", f"/students/{student_id}", json={"status": status})["data"]

    def set_disabled(self, student_id: str, disabled: bool) -> dict[str, Any]:
        return self._call("PUT", f"/students/{student_id}", json={"disabled": disabled})["data"]

    def delete_student(self, student_id: str) -> None:
        self._call("DELETE", f"/students/{student_id}")

    # certificates
    def upload_certificate(self, fields: dict[str, Any]) -> dict[str, Any]:
        return self._call("POST", "/certificates", json=fields)["data"]

    # catalog
    def list_categories(self) -> list[dict[str, Any]]:
        return self._call("GET", "/courses")["data"]["categories"]
