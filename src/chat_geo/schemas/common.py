"""Shared Pydantic schemas and helpers for the response envelope."""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class FailureResponse(BaseModel):
    """Envelope returned for every failed request."""

    status: Literal["fail"] = "fail"
    error: str = Field(..., description="Human readable failure description")


def success(data: Any, **extra: Any) -> dict[str, Any]:
    """Wrap ``data`` in the success envelope; lists also report their ``count``."""
    body: dict[str, Any] = {"status": "success", "data": data}
    if isinstance(data, list):
        body["count"] = len(data)
    body.update(extra)
    return body


def failure(error: str) -> dict[str, Any]:
    """Return the failure envelope for ``error``."""
    return FailureResponse(error=error).model_dump()


def dump(schema: type[BaseModel], row: Any) -> dict[str, Any]:
    """Validate an ORM row against ``schema`` and return its JSON-ready dict."""
    return schema.model_validate(row).model_dump(mode="json")
