"""
Blog request schemas and validation.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 2000


class BlogValidationError(ValueError):
    pass


class BlogPayload(BaseModel):
    # Whitespace is stripped before the length bounds are checked.
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: str = Field(..., max_length=TITLE_MAX_LENGTH)
    description: str = Field(..., max_length=DESCRIPTION_MAX_LENGTH)


def _format_errors(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = str(error.get("msg") or "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


def validate_payload(raw: Any) -> BlogPayload:
    """
    Accept exactly {title, description}, both strings within their bounds.
    """
    if not isinstance(raw, dict):
        raise BlogValidationError("Request body must be an object with title and description.")
    try:
        return BlogPayload.model_validate(raw)
    except ValidationError as exc:
        raise BlogValidationError(_format_errors(exc)) from exc
