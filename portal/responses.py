"""The JSON envelope returned by every API endpoint."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from http import HTTPStatus
from typing import Any
from uuid import UUID

_ABSENT: Any = object()


def _jsonable(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return _jsonable(value.to_dict())
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


@dataclass(frozen=True)
class HttpResponse:
    """A status code with a JSON-ready body."""

    status: int
    body: Any = None

    def json(self) -> str:
        return json.dumps(self.body)


@dataclass(frozen=True)
class ApiResponse:
    """Success or error envelope; absent fields are left out of the output."""

    success: bool
    message: str | None = None
    data: Any = _ABSENT
    error: str | None = None

    @classmethod
    def success(cls, data: Any) -> ApiResponse:
        return cls(success=True, data=data)

    @classmethod
    def success_with_message(cls, data: Any, message: str) -> ApiResponse:
        return cls(success=True, message=message, data=data)

    @classmethod
    def error(cls, message: str) -> ApiResponse:
        return cls(success=False, error=message)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": self.success}
        if self.message is not None:
            result["message"] = self.message
        if self.data is not _ABSENT:
            result["data"] = _jsonable(self.data)
        if self.error is not None:
            result["error"] = self.error
        return result

    def to_response(self, status: int | HTTPStatus) -> HttpResponse:
        return HttpResponse(int(status), self.to_dict())