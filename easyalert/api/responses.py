"""Response helpers shared by all routes."""

import json
from datetime import datetime, timezone
from typing import Any

from fastapi.responses import JSONResponse

JSON_CONTENT_TYPE = "application/json; charset=UTF-8"


class PrettyJSONResponse(JSONResponse):
    """JSON indented by two spaces, always sent as UTF-8."""

    media_type = JSON_CONTENT_TYPE

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=2).encode("utf-8")


def error_response(status_code: int, message: str) -> PrettyJSONResponse:
    return PrettyJSONResponse({"error": message}, status_code=status_code)


def format_timestamp(value: datetime) -> str:
    """RFC 3339 in UTC, e.g. ``2024-01-02T03:04:05Z``.

    Naive values are read back from engines without time zone support and
    are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
