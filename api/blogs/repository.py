"""
Blog persistence (raw SQL).

Each function issues exactly one statement on the connection it is given.
"""

from __future__ import annotations

import asyncpg

from core import db


async def list_blogs(conn: asyncpg.Connection) -> list[dict]:
    return await db.fetch_all(
        conn,
        """
        SELECT id, title, description, "createdAt", "updatedAt"
        FROM blogs
        ORDER BY id
        """,
    )


async def create_blog(conn: asyncpg.Connection, *, title: str, description: str) -> str:
    return await db.execute(
        conn,
        """
        INSERT INTO blogs (title, description)
        VALUES ($1, $2)
        """,
        title,
        description,
    )


async def update_blog(conn: asyncpg.Connection, blog_id: int, *, title: str, description: str) -> str:
    return await db.execute(
        conn,
        """
        UPDATE blogs
        SET title = $2,
            description = $3,
            "updatedAt" = now()
        WHERE id = $1
        """,
        blog_id,
        title,
        description,
    )


async def delete_blog(conn: asyncpg.Connection, blog_id: int) -> str:
    return await db.execute(
        conn,
        """
        DELETE FROM blogs
        WHERE id = $1
        """,
        blog_id,
    )
