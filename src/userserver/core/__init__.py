"""
=============================================================================
CORE NETWORKING
=============================================================================

Raw socket handling, independent of HTTP:

- SocketServer   Listening socket and the sequential accept loop
- Connection     One client: single bounded read, write, close

=============================================================================
"""

from .socket_server import SocketServer
from .connection import Connection, ConnectionState

__all__ = [
    "SocketServer",
    "Connection",
    "ConnectionState",
]
