"""ASGI middleware that injects the reload script into HTML responses."""

from __future__ import annotations

import logging

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from browser_reload.core.config import DEFAULT_CHECK_PATH
from browser_reload.core.signal import ReloadSignal
from browser_reload.server.script import BODY_CLOSE, inject_reload_script, reload_script

logger = logging.getLogger(__name__)

CONDITIONAL_REQUEST_HEADERS = (b"if-none-match", b"if-modified-since")


def _mark_uncacheable(start: Message, content_length: int | None) -> None:
    """Drop the validators of a rewritten response and forbid caching it."""
    start["headers"] = list(start.get("headers", []))
    headers = MutableHeaders(raw=start["headers"])
    for name in ("etag", "last-modified", "content-length"):
        del headers[name]
    if content_length is not None:
        headers["content-length"] = str(content_length)
    headers["cache-control"] = "no-store"


def is_html_content_type(content_type: str | None, *, when_missing: bool = True) -> bool:
    """Whether a response with this Content-Type should get the script.

    A missing header counts as HTML when *when_missing* is set. Otherwise
    the header must contain ``text/html``; parameters such as a charset are
    allowed and no case folding is done.
    """
    if content_type is None:
        return when_missing
    return "text/html" in content_type


class ReloadScriptMiddleware:
    """Appends the polling script before ``</body>`` in HTML responses.

    Only complete, uncompressed, UTF-8 bodies sent in a single message are
    rewritten. Everything else (JSON, fragments with a non-HTML type,
    streamed or compressed bodies) goes through untouched. Rewritten pages
    lose their ETag/Last-Modified and are marked no-store, and conditional
    request headers are dropped so a reload always gets a fresh page.

    Usage:
        app.add_middleware(ReloadScriptMiddleware, signal=signal)
    """

    def __init__(
        self,
        app: ASGIApp,
        signal: ReloadSignal,
        *,
        check_path: str = DEFAULT_CHECK_PATH,
        interval_ms: int = 1000,
        inject_when_content_type_missing: bool = True,
    ) -> None:
        self.app = app
        self.signal = signal
        self.check_path = check_path
        self.interval_ms = interval_ms
        self.inject_when_content_type_missing = inject_when_content_type_missing

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        # Pages must always be rendered fresh so the script carries the
        # current timestamp; a 304 would hand back the stale copy.
        scope = dict(scope)
        scope["headers"] = [
            (key, value) for key, value in scope.get("headers", [])
            if key.lower() not in CONDITIONAL_REQUEST_HEADERS
        ]
        is_head = scope.get("method") == "HEAD"
        pending_start: Message | None = None

        async def send_wrapper(message: Message) -> None:
            nonlocal pending_start

            if message["type"] == "http.response.start":
                headers = Headers(raw=message.get("headers", []))
                if self._eligible(headers):
                    # Hold the headers back until we know the final body length.
                    pending_start = message
                    return
                await send(message)
                return

            if message["type"] == "http.response.body" and pending_start is not None:
                start, pending_start = pending_start, None
                if message.get("more_body", False):
                    # Streamed body, not a single text payload
                    await send(start)
                    await send(message)
                    return

                if is_head:
                    # No body to measure; the GET length may differ after injection
                    _mark_uncacheable(start, content_length=None)
                    await send(start)
                    await send(message)
                    return

                body = message.get("body", b"")
                new_body = self.rewrite_body(body)
                if new_body is not body:
                    _mark_uncacheable(start, content_length=len(new_body))
                    message = {**message, "body": new_body}
                await send(start)
                await send(message)
                return

            if pending_start is not None:
                # e.g. http.response.pathsend: nothing to rewrite
                start, pending_start = pending_start, None
                await send(start)
            await send(message)

        await self.app(scope, receive, send_wrapper)

    def _eligible(self, headers: Headers) -> bool:
        if "content-encoding" in headers:
            return False
        return is_html_content_type(
            headers.get("content-type"),
            when_missing=self.inject_when_content_type_missing,
        )

    def rewrite_body(self, body: bytes) -> bytes:
        """Return *body* with the script injected, or *body* itself if not applicable."""
        try:
            html = body.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Skipping reload script injection: body is not UTF-8 text")
            return body
        if BODY_CLOSE not in html:
            return body
        script = reload_script(self.signal.current(), self.check_path, self.interval_ms)
        return inject_reload_script(html, script).encode("utf-8")
