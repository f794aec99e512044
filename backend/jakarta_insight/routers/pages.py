"""
Frontend pages. The auth gate middleware decides who reaches them; these
routes only hand out the single-page app shell.
"""
from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse

from jakarta_insight.config import Settings, get_settings

router = APIRouter()


def _page(request: Request, settings: Settings):
    if settings.FRONTEND_DIR:
        index = Path(settings.FRONTEND_DIR) / "index.html"
        if index.is_file():
            return FileResponse(index)
    return {"page": request.url.path}


@router.get("/login", include_in_schema=False)
async def login_page(request: Request, settings: Settings = Depends(get_settings)):
    return _page(request, settings)


@router.get("/dashboard", include_in_schema=False)
@router.get("/dashboard/{rest:path}", include_in_schema=False)
@router.get("/analytics", include_in_schema=False)
@router.get("/analytics/{rest:path}", include_in_schema=False)
@router.get("/citizen-engagement", include_in_schema=False)
@router.get("/citizen-engagement/{rest:path}", include_in_schema=False)
async def protected_page(request: Request, settings: Settings = Depends(get_settings)):
    return _page(request, settings)
