from typing import Any
from django.http import HttpRequest, JsonResponse


def get_client_ip(group: str | None, request: HttpRequest) -> str:
    """Rate limit key: the first address in X-Forwarded-For, else REMOTE_ADDR."""
    forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR", "")


def envelope(
    success: bool,
    data: Any = None,
    message: str | None = None,
    error: str | None = None,
    status: int = 200,
) -> JsonResponse:
    """
    Build the uniform API response: every response carries ``success`` and
    ``data``; ``message`` and ``error`` are added when given.
    """
    body: dict[str, Any] = {"success": success, "data": data}
    if message is not None:
        body["message"] = message
    if error is not None:
        body["error"] = error
    return JsonResponse(body, status=status, json_dumps_params={"ensure_ascii": False})
