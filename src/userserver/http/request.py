"""
=============================================================================
HTTP REQUEST CLASSIFICATION
=============================================================================

This module turns the raw text read from a socket into a UserRequest.
It does NOT implement a general HTTP parser. The service only ever needs
to know which of five operations a request asks for, so it looks at the
start of the text and nothing else.

=============================================================================
PREFIX MATCHING
=============================================================================

Prefixes are tested in a fixed order. The first match wins:

    ┌───┬──────────────────┬────────────┬──────────────────────────────┐
    │ # │ Prefix           │ Route kind │ Example                      │
    ├───┼──────────────────┼────────────┼──────────────────────────────┤
    │ 1 │ "POST /users"    │ CREATE     │ POST /users HTTP/1.1         │
    │ 2 │ "GET /users/"    │ READ_ONE   │ GET /users/7 HTTP/1.1        │
    │ 3 │ "GET /users"     │ READ_ALL   │ GET /users HTTP/1.1          │
    │ 4 │ "PUT /users/"    │ UPDATE     │ PUT /users/7 HTTP/1.1        │
    │ 5 │ "DELETE /users/" │ DELETE     │ DELETE /users/7 HTTP/1.1     │
    │ - │ (anything else)  │ NOT_FOUND  │ GET /unknownpath HTTP/1.1    │
    └───┴──────────────────┴────────────┴──────────────────────────────┘

"GET /users/" MUST be tested before "GET /users": every item request
also starts with the collection prefix.

=============================================================================
IDENTIFIER AND BODY EXTRACTION
=============================================================================

    raw = "GET /users/42 HTTP/1.1\r\nHost: x\r\n\r\n"

    raw.split("/")  →  ["GET ", "users", "42 HTTP", "1.1\r\nHost: x..."]
                                          ───┬───
                                             │
                        piece [2], cut at first whitespace → "42"

    body = everything after the LAST "\r\n\r\n"
           (the whole text when there is no blank line at all)

The identifier stays a string here. Handlers call parse_user_id() so
that a bad identifier becomes a 500 from inside the handler, like any
other input problem.

=============================================================================
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class RouteKind(Enum):
    """The operation a request was classified as."""
    CREATE = "create"
    READ_ONE = "read_one"
    READ_ALL = "read_all"
    UPDATE = "update"
    DELETE = "delete"
    NOT_FOUND = "not_found"


# Order matters, see module docstring.
ROUTE_PREFIXES: Tuple[Tuple[str, RouteKind], ...] = (
    ("POST /users", RouteKind.CREATE),
    ("GET /users/", RouteKind.READ_ONE),
    ("GET /users", RouteKind.READ_ALL),
    ("PUT /users/", RouteKind.UPDATE),
    ("DELETE /users/", RouteKind.DELETE),
)


class InvalidUserId(ValueError):
    """Raised when a path identifier is not a 32-bit signed integer."""

    def __init__(self, raw_id: str):
        super().__init__(f"Invalid user id: {raw_id!r}")
        self.raw_id = raw_id


_USER_ID_RE = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(2 ** 31)
_INT32_MAX = 2 ** 31 - 1


def parse_user_id(raw_id: str) -> int:
    """
    Parse a path identifier into an int.

    Accepts an optional sign followed by ASCII digits, within the signed
    32-bit range of the id column. int() alone is too lenient here: it
    accepts "1_000", surrounding spaces and non-ASCII digits.

    Raises:
        InvalidUserId: For anything else, including the empty string.
    """
    if not _USER_ID_RE.fullmatch(raw_id):
        raise InvalidUserId(raw_id)

    value = int(raw_id)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise InvalidUserId(raw_id)
    return value


def classify(raw: str) -> RouteKind:
    """Return the route kind of the first matching prefix."""
    for prefix, kind in ROUTE_PREFIXES:
        if raw.startswith(prefix):
            return kind
    return RouteKind.NOT_FOUND


def extract_user_id(raw: str) -> str:
    """Return the second path segment, cut at the first whitespace."""
    pieces = raw.split("/")
    if len(pieces) < 3:
        return ""
    words = pieces[2].split()
    return words[0] if words else ""


def extract_body(raw: str) -> str:
    """Return the text after the last blank line."""
    return raw.split("\r\n\r\n")[-1]


@dataclass
class UserRequest:
    """
    A classified request.

    Attributes:
        kind:     Which operation the request asks for.
        user_id:  Unparsed identifier for item routes, "" otherwise.
        body:     Request body text ("" when the route takes no body).
        method:   First token of the request line (for logging).
        path:     Second token of the request line (for logging).
    """
    kind: RouteKind
    user_id: str = ""
    body: str = ""
    method: str = ""
    path: str = ""

    @property
    def request_line(self) -> str:
        return f"{self.method} {self.path}".strip()


class RequestParser:
    """
    Turns raw request bytes into UserRequest objects.

    Bytes are decoded as UTF-8 with replacement, so a request truncated
    in the middle of a multi-byte character still classifies.
    """

    ID_ROUTES = frozenset({RouteKind.READ_ONE, RouteKind.UPDATE, RouteKind.DELETE})
    BODY_ROUTES = frozenset({RouteKind.CREATE, RouteKind.UPDATE})

    def parse(self, data: bytes) -> UserRequest:
        raw = data.decode("utf-8", errors="replace")
        kind = classify(raw)

        first_line = raw.split("\r\n", 1)[0].split()
        method = first_line[0] if first_line else ""
        path = first_line[1] if len(first_line) > 1 else ""

        return UserRequest(
            kind=kind,
            user_id=extract_user_id(raw) if kind in self.ID_ROUTES else "",
            body=extract_body(raw) if kind in self.BODY_ROUTES else "",
            method=method,
            path=path,
        )


def parse_request(data: bytes) -> UserRequest:
    """Convenience function to parse a request with a default parser."""
    return RequestParser().parse(data)
