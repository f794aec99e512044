"""
Login, logout and the current user, backed by the demo credential.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request, Response

from jakarta_insight.auth import authenticate, clear_auth_cookies, current_user, set_auth_cookies
from jakarta_insight.schemas import LoginRequest, UserResponse

logger = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api/auth")


@router.post("/login", response_model=UserResponse)
async def login(data: LoginRequest, response: Response):
    """Check the credential and, on success, set the ``isAuthenticated`` and ``userData`` cookies."""
    user = authenticate(data.username, data.password)
    if user is None:
        logger.warning("Failed login for %r", data.username)
        raise HTTPException(status_code=401, detail="Invalid username or password")

    set_auth_cookies(response, user)
    logger.info("User %s logged in", user.username)
    return user.as_dict()


@router.post("/logout")
async def logout(response: Response):
    clear_auth_cookies(response)
    return {"status": "ok"}


@router.get("/me", response_model=UserResponse)
async def me(request: Request):
    user = current_user(request)
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user.as_dict()
