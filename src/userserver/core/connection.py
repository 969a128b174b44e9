"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

This module wraps one accepted client socket with the three operations
the server needs: read the request, send the response, close.

=============================================================================
ONE READ, ONE RESPONSE, ONE CLOSE
=============================================================================

TCP is a byte stream, so a full HTTP reader would loop on recv() until
it saw \r\n\r\n and then Content-Length more bytes. This service does
not. It reads ONCE, up to buffer_size bytes (1024 by default):

    ┌─────────────────────────────────────────────────────────────────┐
    │  Client sends 1500 bytes                                         │
    │                                                                  │
    │  recv(1024) →  [ first 1024 bytes ]     handled                  │
    │                [ remaining 476 bytes ]  never read               │
    └─────────────────────────────────────────────────────────────────┘

Bodies that do not fit are truncated silently (and usually fail JSON
decoding further on). There is no keep-alive: after the response is
written the connection is closed, and that close is what marks the end
of the response body for the client.

=============================================================================
CONNECTION STATE MACHINE
=============================================================================

    NEW ──────► READING ──────► PROCESSING ──────► WRITING
     │             │                                  │
     │             ▼                                  │
     └──────────► CLOSING ◄───────────────────────────┘
                    │
                    ▼
                  CLOSED

=============================================================================
"""

import socket
import time
import logging
import uuid
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection lifecycle states, used for logging and close()."""
    NEW = "new"
    READING = "reading"
    PROCESSING = "processing"
    WRITING = "writing"
    CLOSING = "closing"
    CLOSED = "closed"


@dataclass
class Connection:
    """
    Represents a client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short connection identifier (for logging).
        state: Current connection state.
        created_at: Timestamp when connection was accepted.
        buffer_size: Maximum bytes read for the request.
        timeout: Socket timeout for the read and the write.
    """

    socket: socket.socket
    address: tuple

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    buffer_size: int = 1024
    timeout: Optional[float] = 30.0

    # Total time close() spends draining unread input
    DRAIN_TIMEOUT = 0.5

    def __post_init__(self):
        # The listening socket polls with a timeout; accepted sockets may
        # inherit it on some platforms, so reset explicitly.
        self.socket.setblocking(True)
        if self.timeout:
            self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def age(self) -> float:
        """Get connection age in seconds."""
        return time.time() - self.created_at

    # =========================================================================
    # READING
    # =========================================================================

    def read_request(self) -> Optional[bytes]:
        """
        Read the request with a single recv() of at most buffer_size bytes.

        Returns:
            The bytes received, or None if the client closed without
            sending anything.

        Raises:
            TimeoutError: If the client sends nothing within timeout.
            OSError: On other socket errors (connection reset, ...).
        """
        self.state = ConnectionState.READING

        try:
            data = self.socket.recv(self.buffer_size)
        except socket.timeout:
            raise TimeoutError("Request read timeout")

        if not data:
            return None
        return data

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> bool:
        """
        Send response data to the client.

        Uses sendall() so the whole response goes out or an error is
        reported. Failures are logged, never retried.

        Returns:
            True if send succeeded, False if the connection was lost.
        """
        self.state = ConnectionState.WRITING

        try:
            self.socket.sendall(data)
            return True
        except OSError as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection gracefully.

        1. shutdown(SHUT_WR): send FIN, the client sees end of body
        2. Drain whatever the client still sends, for DRAIN_TIMEOUT
           seconds in total
        3. close(): release the file descriptor

        Draining avoids a TCP reset when the request was longer than the
        buffer and part of it is still unread in the kernel. The deadline
        covers the whole drain, so a client that keeps sending cannot hold
        the accept loop.
        """
        if self.state == ConnectionState.CLOSED:
            return

        self.state = ConnectionState.CLOSING

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Already disconnected

        deadline = time.monotonic() + self.DRAIN_TIMEOUT
        try:
            while True:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    logger.debug(f"[{self.id}] Client still sending, closing anyway")
                    break
                self.socket.settimeout(remaining)
                if not self.socket.recv(1024):
                    break
        except OSError:
            pass  # socket.timeout is an OSError too

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age:.3f}s")

    # =========================================================================
    # CONTEXT MANAGER
    # =========================================================================

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
