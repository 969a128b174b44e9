"""
=============================================================================
HTTP RESPONSE WRITING
=============================================================================

Responses are a status line block followed directly by the body:

    ┌─────────────────────────────────────────────────────────────────┐
    │  HTTP/1.1 200 OK\r\n                  ← Status line             │
    │  Content-Type: application/json\r\n   ← Only on 200             │
    │  \r\n                                 ← End of headers          │
    │  {"id":1,"name":"Ana",...}            ← Body                    │
    └─────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────┐
    │  HTTP/1.1 404 NOT FOUND\r\n                                     │
    │  \r\n                                                           │
    │  Usuario no encontrado                                          │
    └─────────────────────────────────────────────────────────────────┘

There is NO Content-Length header. The server closes the connection
after every response, and the close is what tells the client where the
body ends (RFC 7230 §3.3.3, rule 7).

The 200 line always advertises application/json, even for the short
text confirmations ("Usuario creado").

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict

from .status_codes import HTTPStatus


JSON_CONTENT_TYPE = "application/json"


@dataclass
class HTTPResponse:
    """
    A response ready to be written to the client socket.

    Handlers build these through ok(), not_found() and internal_error()
    rather than directly.
    """
    status: HTTPStatus = HTTPStatus.OK
    body: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    version: str = "HTTP/1.1"

    @property
    def status_line(self) -> str:
        """
        Get the HTTP status line.

        Example: "HTTP/1.1 500 INTERNAL SERVER ERROR"
        """
        return f"{self.version} {int(self.status)} {self.status.phrase}"

    def to_bytes(self) -> bytes:
        """
        Serialize the response for socket.sendall().

        Headers are written in insertion order, then a blank line, then
        the UTF-8 encoded body.
        """
        lines = [self.status_line]
        for name, value in self.headers.items():
            lines.append(f"{name}: {value}")
        lines.append("")

        head = "\r\n".join(lines) + "\r\n"
        return (head + self.body).encode("utf-8")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def ok(body: str = "") -> HTTPResponse:
    """200 OK with the JSON content type."""
    return HTTPResponse(
        status=HTTPStatus.OK,
        body=body,
        headers={"Content-Type": JSON_CONTENT_TYPE},
    )


def not_found(message: str = "404 Not Found") -> HTTPResponse:
    """404 NOT FOUND with a plain text body."""
    return HTTPResponse(status=HTTPStatus.NOT_FOUND, body=message)


def internal_error(message: str = "Error") -> HTTPResponse:
    """
    500 INTERNAL SERVER ERROR.

    Clients only ever see the generic message; the cause is logged.
    """
    return HTTPResponse(status=HTTPStatus.INTERNAL_SERVER_ERROR, body=message)
