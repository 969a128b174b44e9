"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The service answers with exactly three status codes:

    ┌──────┬────────────────────────┬─────────────────────────────────────┐
    │ Code │ Status line            │ Used for                            │
    ├──────┼────────────────────────┼─────────────────────────────────────┤
    │ 200  │ OK                     │ Every successful operation          │
    │ 404  │ NOT FOUND              │ Unknown route, missing user         │
    │ 500  │ INTERNAL SERVER ERROR  │ Bad JSON, bad id, database failure  │
    └──────┴────────────────────────┴─────────────────────────────────────┘

Reason phrases are upper case on the wire and existing clients match
on these exact lines.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'NOT FOUND'
    """

    OK = 200
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500

    @property
    def phrase(self) -> str:
        """Reason phrase that follows the code in the status line."""
        return _STATUS_PHRASES[self]

    @property
    def is_success(self) -> bool:
        return 200 <= self < 300


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.NOT_FOUND: "NOT FOUND",
    HTTPStatus.INTERNAL_SERVER_ERROR: "INTERNAL SERVER ERROR",
}
