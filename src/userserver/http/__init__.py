"""
=============================================================================
HTTP PROTOCOL LAYER
=============================================================================

The small slice of HTTP/1.1 this service speaks:

- request.py       Prefix classification, id and body extraction
- response.py      Status line + body serialization
- router.py        RouteKind → handler dispatch table
- status_codes.py  The three status codes the service answers with

=============================================================================
"""

from .request import (
    RouteKind,
    UserRequest,
    RequestParser,
    InvalidUserId,
    parse_request,
    parse_user_id,
)
from .response import (
    HTTPResponse,
    ok,
    not_found,
    internal_error,
)
from .router import Router, Handler
from .status_codes import HTTPStatus

__all__ = [
    # Request classification
    "RouteKind",
    "UserRequest",
    "RequestParser",
    "InvalidUserId",
    "parse_request",
    "parse_user_id",

    # Responses
    "HTTPResponse",
    "ok",
    "not_found",
    "internal_error",

    # Dispatch
    "Router",
    "Handler",

    # Status codes
    "HTTPStatus",
]
