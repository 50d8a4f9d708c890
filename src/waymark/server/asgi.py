"""ASGI adapter — serves a Router from any ASGI server.

The only component that touches raw ASGI directly. Converts the scope
to a ``RequestContext``, runs the synchronous dispatch in a worker
thread, and sends the recorded response back through ASGI send().
"""

import logging

import anyio.to_thread

from waymark._internal.asgi import Receive, Scope, Send
from waymark.context import response_var
from waymark.errors import HTTPError, NotFound
from waymark.http.request import RequestContext
from waymark.http.response import ResponseRecorder
from waymark.routing.router import Router
from waymark.server.sender import send_response

logger = logging.getLogger("waymark.server")


class RouterApp:
    """ASGI 3 application wrapping a ``Router``.

    Usage::

        router = Router()
        router.get("/", index)
        app = RouterApp(router)   # serve with any ASGI server

    The router is frozen on lifespan startup or on the first request,
    whichever comes first. Handlers write output through
    ``waymark.context.get_response()``.
    """

    __slots__ = ("router",)

    def __init__(self, router: Router) -> None:
        self.router = router

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        self.router.freeze()
        request = RequestContext.from_asgi(scope)
        response = ResponseRecorder.for_request(request)

        try:
            handled = await anyio.to_thread.run_sync(self._dispatch, request, response)
        except Exception:
            logger.exception("Unhandled error dispatching %s %s", request.method, request.uri)
            response = _error_response(request, HTTPError(status=500, detail="Internal Server Error"))
        else:
            if not handled and response.status == 404 and not response.written:
                response = _error_response(request, NotFound())

        await send_response(response, send)

    def _dispatch(self, request: RequestContext, response: ResponseRecorder) -> bool:
        token = response_var.set(response)
        try:
            return self.router.run(request, responder=response)
        finally:
            response_var.reset(token)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol, freezing the router at startup."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                self.router.freeze()
                logger.debug("Router frozen with %d routes", len(self.router.routes))
                await send({"type": "lifespan.startup.complete"})
            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return


def _error_response(request: RequestContext, error: HTTPError) -> ResponseRecorder:
    response = ResponseRecorder.for_request(request, content_type="text/plain; charset=utf-8")
    response.set_status(error.status)
    response.write(error.detail or str(error.status))
    return response
