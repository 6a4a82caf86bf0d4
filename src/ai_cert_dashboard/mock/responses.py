"""Response envelope used by every mock endpoint."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel

SUCCESS_CODE = 200


def _encode(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True, exclude_none=True)
    if isinstance(data, list):
        return [_encode(item) for item in data]
    return data


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def success_response(data: Any, message: str = "success") -> dict[str, Any]:
    """Wrap ``data`` in a success envelope, serializing models with camelCase keys."""
    return {"code": SUCCESS_CODE, "message": message, "data": _encode(data), "timestamp": _timestamp()}


def error_response(message: str, code: int) -> dict[str, Any]:
    return {"code": code, "message": message, "data": None, "timestamp": _timestamp()}
