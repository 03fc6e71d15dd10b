"""Response envelope shared by every route: {status, message, data, meta?}."""

from typing import Any

from fastapi import status as http_status


def envelope(
    data: Any = None,
    message: str = "Success",
    status: int = http_status.HTTP_200_OK,
    meta: dict | None = None,
) -> dict[str, Any]:
    """Wrap a route's payload; ``meta`` is only included when given."""
    body: dict[str, Any] = {"status": status, "message": message, "data": data}
    if meta is not None:
        body["meta"] = meta
    return body
