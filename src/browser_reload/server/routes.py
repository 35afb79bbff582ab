"""Status endpoint that serves the current reload timestamp."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from browser_reload.core.config import DEFAULT_CHECK_PATH
from browser_reload.core.signal import ReloadSignal

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def reload_check_response(signal: ReloadSignal) -> PlainTextResponse:
    """Current timestamp as text/plain with caching disabled."""
    return PlainTextResponse(
        str(signal.current()),
        status_code=200,
        headers=NO_CACHE_HEADERS,
    )


def build_reload_router(signal: ReloadSignal, path: str = DEFAULT_CHECK_PATH) -> APIRouter:
    router = APIRouter()

    @router.get(path, response_class=PlainTextResponse, include_in_schema=False)
    async def reload_check() -> PlainTextResponse:
        return reload_check_response(signal)

    return router
