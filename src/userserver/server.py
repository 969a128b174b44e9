"""
=============================================================================
USERS HTTP SERVER
=============================================================================

The main server class. It ties together:

- SocketServer:   Listening socket and accept loop
- RequestParser:  Prefix classification of the raw request
- Router:         RouteKind → handler table
- UserHandlers:   The five SQL-backed operations

=============================================================================
REQUEST FLOW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                       ONE CONNECTION                                │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   accept()                                                           │
    │      │                                                               │
    │      ▼                                                               │
    │   conn.read_request()      single recv(1024)                         │
    │      │                                                               │
    │      ▼                                                               │
    │   parser.parse(data)       → UserRequest(kind, user_id, body)        │
    │      │                                                               │
    │      ▼                                                               │
    │   router.dispatch(req)     → handler → new DB connection → SQL       │
    │      │                                                               │
    │      ▼                                                               │
    │   conn.send_response()     status line + body                        │
    │      │                                                               │
    │      ▼                                                               │
    │   conn.close()             end of body for the client                │
    │                                                                      │
    │   ... and only then the next accept()                                │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Everything happens on the thread that called run(). Requests are
therefore serialized: no locks are needed, and no throughput scaling is
offered either.

=============================================================================
STARTUP
=============================================================================

1. Configure logging
2. Create the users table if missing (SchemaInitError aborts startup,
   the socket is never bound)
3. Bind and enter the accept loop

=============================================================================
"""

import logging
import time
from typing import Optional

from sqlalchemy.engine import Engine

from .config import ServerConfig
from .core import Connection, ConnectionState, SocketServer
from .db import init_schema, make_engine
from .handlers import UserHandlers
from .http import HTTPResponse, RequestParser, Router


logger = logging.getLogger(__name__)


class UserServer:
    """
    HTTP server for the users resource.

    =========================================================================
    USAGE
    =========================================================================

        config = ServerConfig.from_env()
        server = UserServer(config)
        server.run()            # Blocks until Ctrl+C / SIGTERM

    From another thread (tests):

        server.shutdown()

    =========================================================================
    """

    def __init__(self, config: Optional[ServerConfig] = None, engine: Optional[Engine] = None):
        """
        Initialize the server.

        Args:
            config: Server configuration. Defaults are used if not provided.
            engine: SQLAlchemy engine. Built from config.database_url if
                    not provided.
        """
        self.config = config or ServerConfig()
        self.config.validate()

        self.engine = engine or make_engine(self.config.database_url)

        self._socket_server = SocketServer(self.config)
        self._parser = RequestParser()
        self._router = Router()
        UserHandlers(self.engine).register(self._router)

    @property
    def router(self) -> Router:
        return self._router

    @property
    def socket_server(self) -> SocketServer:
        return self._socket_server

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self, host: Optional[str] = None, port: Optional[int] = None):
        """
        Initialize the schema and serve until shutdown (blocking).

        Args:
            host: Override config host.
            port: Override config port.

        Raises:
            ValueError: If the host or port override is invalid.
            SchemaInitError: If the users table cannot be created.
            OSError: If the address cannot be bound.
        """
        if host:
            self.config.host = host
        if port is not None:
            self.config.port = port
        self.config.validate()

        self._setup_logging()

        init_schema(self.engine)

        logger.info(f"Starting users server on {self.config.host}:{self.config.port}")

        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self.engine.dispose()
            logger.info("Server stopped")

    def shutdown(self):
        """Stop accepting connections. run() returns shortly after."""
        self._socket_server.shutdown()

    def _setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        logging.getLogger("userserver").setLevel(level)

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """
        Fully handle one connection: read, dispatch, write, close.

        Transport errors are logged and the connection is abandoned; the
        accept loop keeps going either way.
        """
        with conn:
            try:
                data = conn.read_request()
            except (TimeoutError, OSError) as e:
                logger.warning(f"[{conn.id}] Read failed: {e}")
                return

            if data is None:
                logger.debug(f"[{conn.id}] Client closed without sending a request")
                return

            conn.state = ConnectionState.PROCESSING
            response = self.handle_request(data, conn_id=conn.id, client_ip=conn.client_ip)
            conn.send_response(response.to_bytes())

    def handle_request(self, data: bytes, conn_id: str = "-", client_ip: str = "-") -> HTTPResponse:
        """
        Turn raw request bytes into a response.

        Separate from the socket handling so it can be driven directly.
        """
        start = time.perf_counter()

        request = self._parser.parse(data)
        response = self._router.dispatch(request)

        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"[{conn_id}] {client_ip} {request.request_line or '-'} -> "
            f"{int(response.status)} ({duration_ms:.1f}ms)"
        )
        return response


def create_app(config: Optional[ServerConfig] = None) -> UserServer:
    """
    Create a users server.

    Example:
        app = create_app(ServerConfig(port=3000))
        app.run()
    """
    return UserServer(config)
