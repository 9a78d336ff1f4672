"""
Blog business logic.

Flow per request:
1) Parse the path id (update/delete), before any connection is opened
2) Open a connection
3) Validate the payload (create/update)
4) Run one statement
5) Close the connection, whatever happened
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import parse_qsl

from fastapi import Request

from core import db
from core.settings import Settings

from . import repository, schemas

# Upper bound of the INTEGER id column.
MAX_BLOG_ID = 2_147_483_647

logger = logging.getLogger(__name__)


def parse_blog_id(raw: str) -> int:
    value = raw or ""
    if not value.isascii() or not value.isdigit():
        raise schemas.BlogValidationError("Id must be an integer")
    blog_id = int(value)
    if blog_id > MAX_BLOG_ID:
        raise schemas.BlogValidationError(f"Id must not exceed {MAX_BLOG_ID}")
    return blog_id


def _form_fields(body: bytes) -> dict[str, str]:
    fields: dict[str, str] = {}
    for key, value in parse_qsl(body.decode("utf-8", errors="replace"), keep_blank_values=True):
        if key in fields:
            raise schemas.BlogValidationError(f"{key}: Field must not be repeated")
        fields[key] = value
    return fields


async def read_body(request: Request) -> Any:
    """
    Decode a JSON or urlencoded request body. An empty body decodes to None.
    """
    body = await request.body()
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith("application/x-www-form-urlencoded"):
        return _form_fields(body)
    if not body.strip():
        return None
    try:
        return json.loads(body)
    except ValueError as exc:
        raise schemas.BlogValidationError("Request body must be valid JSON.") from exc


async def list_blogs(settings: Settings) -> list[dict]:
    async with db.connection(settings) as conn:
        return await repository.list_blogs(conn)


async def create_blog(settings: Settings, raw_payload: Any) -> None:
    async with db.connection(settings) as conn:
        payload = schemas.validate_payload(raw_payload)
        status = await repository.create_blog(
            conn,
            title=payload.title,
            description=payload.description,
        )
    logger.info("blog_created status=%s", status)


async def update_blog(settings: Settings, raw_id: str, raw_payload: Any) -> None:
    # Unmatched ids are a silent no-op, not a 404.
    blog_id = parse_blog_id(raw_id)
    async with db.connection(settings) as conn:
        payload = schemas.validate_payload(raw_payload)
        status = await repository.update_blog(
            conn,
            blog_id,
            title=payload.title,
            description=payload.description,
        )
    logger.info("blog_updated id=%s status=%s", blog_id, status)


async def delete_blog(settings: Settings, raw_id: str) -> None:
    blog_id = parse_blog_id(raw_id)
    async with db.connection(settings) as conn:
        status = await repository.delete_blog(conn, blog_id)
    logger.info("blog_deleted id=%s status=%s", blog_id, status)
