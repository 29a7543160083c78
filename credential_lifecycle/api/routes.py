"""Operational HTTP endpoints for the credential manager."""

from __future__ import annotations

import logging

from aiohttp import web

from ..auth_token.manager import CredentialManager

MANAGER_KEY: web.AppKey[CredentialManager] = web.AppKey("credential_manager", CredentialManager)


async def health(request: web.Request) -> web.Response:
    manager = request.app[MANAGER_KEY]
    return web.json_response(
        {"status": "ok", "token_available": manager.get_current_token() is not None}
    )


async def token_status(request: web.Request) -> web.Response:
    manager = request.app[MANAGER_KEY]
    return web.json_response(manager.get_status().to_dict())


async def rotate_token(request: web.Request) -> web.Response:
    """Schedule an out-of-band rotation and answer before it completes."""
    manager = request.app[MANAGER_KEY]
    task = manager.manual_rotate()
    accepted = task is not None
    message = (
        "Token rotation initiated" if accepted else "Token rotation already in progress"
    )
    logging.debug(f"🌐 Rotation endpoint called accepted={accepted} remote={request.remote}")
    return web.json_response(
        {
            "message": message,
            "accepted": accepted,
            "status": manager.get_status().to_dict(),
        },
        status=202,
    )


def create_app(manager: CredentialManager) -> web.Application:
    """Build the aiohttp application exposing health, status and rotation."""
    app = web.Application()
    app[MANAGER_KEY] = manager
    app.router.add_get("/api/health", health)
    app.router.add_get("/api/token/status", token_status)
    app.router.add_post("/api/token/rotate", rotate_token)
    return app
