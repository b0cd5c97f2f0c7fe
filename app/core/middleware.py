from starlette.types import ASGIApp, Message, Receive, Scope, Send
from app.core.config import settings
from app.core.errors import error_response


class BodySizeLimitMiddleware:
    """Reject request bodies larger than ``settings.MAX_BODY_BYTES`` with 413.

    A declared Content-Length is checked up front. Bodies without one
    (chunked uploads) are buffered up to the limit and replayed to the app,
    so the limit holds either way.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = settings.MAX_BODY_BYTES
        headers = dict(scope.get("headers") or [])
        content_length = headers.get(b"content-length", b"").decode("latin-1")
        if content_length.isdigit():
            if int(content_length) > limit:
                await self._reject(scope, receive, send)
                return
            await self.app(scope, receive, send)
            return

        messages = []
        received = 0
        while True:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > limit:
                await self._reject(scope, receive, send)
                return
            if not message.get("more_body", False):
                break

        async def replay() -> Message:
            if messages:
                return messages.pop(0)
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send) -> None:
        response = error_response(413, "Request body too large")
        await response(scope, receive, send)
