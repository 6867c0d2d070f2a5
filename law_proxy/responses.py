"""JSON envelope responses carrying the shared cross-origin headers."""

from typing import Any

from fastapi.responses import JSONResponse, Response

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

CORS_ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"
CORS_ALLOW_METHODS = "GET, POST, OPTIONS"


def cors_headers(allow_origin: str = "*") -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
    }


class EnvelopeResponse(JSONResponse):
    """UTF-8 JSON response that always carries the CORS headers."""

    media_type = JSON_CONTENT_TYPE

    def __init__(
        self,
        content: Any,
        status_code: int = 200,
        allow_origin: str = "*",
        **kwargs: Any,
    ):
        headers = {**cors_headers(allow_origin), **(kwargs.pop("headers", None) or {})}
        super().__init__(content, status_code=status_code, headers=headers, **kwargs)


def preflight_response(allow_origin: str = "*") -> Response:
    """Empty answer to a CORS preflight."""
    return Response(status_code=200, headers=cors_headers(allow_origin))
