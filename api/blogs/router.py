"""
Blog API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.encoders import jsonable_encoder

from core.responses import EscapedJSONResponse
from core.settings import Settings, get_settings

from . import service

router = APIRouter()


@router.get("/blogs")
async def list_blogs(settings: Settings = Depends(get_settings)) -> Response:
    blogs = await service.list_blogs(settings)
    if not blogs:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return EscapedJSONResponse({"success": True, "blogs": jsonable_encoder(blogs)})


@router.post("/blog", status_code=status.HTTP_201_CREATED)
async def create_blog(request: Request, settings: Settings = Depends(get_settings)) -> dict:
    payload = await service.read_body(request)
    await service.create_blog(settings, payload)
    return {"success": True}


@router.put("/blog/{blog_id}")
async def update_blog(
    blog_id: str,
    request: Request,
    settings: Settings = Depends(get_settings),
) -> dict:
    payload = await service.read_body(request)
    await service.update_blog(settings, blog_id, payload)
    return {"success": True}


@router.delete("/blog/{blog_id}")
async def delete_blog(blog_id: str, settings: Settings = Depends(get_settings)) -> dict:
    await service.delete_blog(settings, blog_id)
    return {"success": True}
