"""Request-scoped context via ContextVar.

Provides ``response_var``: the ``ResponseRecorder`` of the request
being dispatched by ``RouterApp``. Handlers are called with path
parameters only, so this is how they write a body or set headers::

    from waymark.context import get_response

    def show_user(user_id):
        get_response().write(f"user {user_id}")

Accessing it outside a request raises ``LookupError``.
"""

from contextvars import ContextVar

from waymark.http.response import ResponseRecorder

response_var: ContextVar[ResponseRecorder] = ContextVar("waymark_response")
"""The current response. Set by the ASGI adapter around dispatch."""


def get_response() -> ResponseRecorder:
    """Return the current response.

    Raises ``LookupError`` if called outside a request context.
    """
    return response_var.get()
