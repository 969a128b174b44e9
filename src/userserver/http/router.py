"""
=============================================================================
REQUEST DISPATCH
=============================================================================

The router is an explicit table from RouteKind to handler:

        UserRequest.kind          Handler
        ────────────────          ─────────────────────
        CREATE            ──►     UserHandlers.create
        READ_ONE          ──►     UserHandlers.read_one
        READ_ALL          ──►     UserHandlers.read_all
        UPDATE            ──►     UserHandlers.update
        DELETE            ──►     UserHandlers.delete
        NOT_FOUND         ──►     404 "404 Not Found"

Kinds without a registered handler fall through to the same 404.

Any exception that escapes a handler is logged and answered with 500.
A failing request never takes the accept loop down with it.

=============================================================================
"""

import logging
from typing import Callable, Dict

from .request import RouteKind, UserRequest
from .response import HTTPResponse, internal_error, not_found


logger = logging.getLogger(__name__)


Handler = Callable[[UserRequest], HTTPResponse]


class Router:
    """
    Dispatches classified requests to their handlers.

    Usage:
        router = Router()
        router.add(RouteKind.READ_ALL, handlers.read_all)
        response = router.dispatch(request)
    """

    def __init__(self):
        self._routes: Dict[RouteKind, Handler] = {}

    def add(self, kind: RouteKind, handler: Handler) -> "Router":
        """
        Register the handler for a route kind.

        Returns:
            Self for method chaining.
        """
        if kind is RouteKind.NOT_FOUND:
            raise ValueError("NOT_FOUND is answered by the router itself")
        self._routes[kind] = handler
        return self

    def route(self, kind: RouteKind):
        """Decorator form of add()."""
        def decorator(handler: Handler) -> Handler:
            self.add(kind, handler)
            return handler
        return decorator

    @property
    def routes(self) -> Dict[RouteKind, Handler]:
        return dict(self._routes)

    def dispatch(self, request: UserRequest) -> HTTPResponse:
        """
        Call the handler for the request's kind.

        Returns:
            The handler's response, 404 for unmatched routes, or 500 if
            the handler raised.
        """
        handler = self._routes.get(request.kind)
        if handler is None:
            return not_found()

        try:
            return handler(request)
        except Exception as e:
            logger.exception(f"Unhandled error in {request.kind.value} handler: {e}")
            return internal_error()
