from __future__ import annotations

from typing import Any

from fastapi.encoders import jsonable_encoder


def envelope(
    data: Any = None,
    message: str | None = None,
    count: int | None = None,
    success: bool = True,
    **extra: Any,
) -> dict[str, Any]:
    """Shared `{success, message?, count?, data?}` response wrapper."""
    body: dict[str, Any] = {"success": success}
    if message is not None:
        body["message"] = message
    if count is not None:
        body["count"] = count
    if data is not None:
        body["data"] = data
    body.update(extra)
    return jsonable_encoder(body)
