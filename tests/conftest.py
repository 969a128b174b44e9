"""
pytest configuration and fixtures.
"""

import socket
import threading
from typing import Callable, Generator, Tuple
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from userserver import UserServer, ServerConfig
from userserver.db import init_schema, make_engine
from userserver.handlers import UserHandlers
from userserver.http import UserRequest, parse_request


def build_request(request_line: str, body: str = "") -> bytes:
    """Build raw request bytes the way curl would send them."""
    head = f"{request_line} HTTP/1.1\r\nHost: localhost:8080\r\nUser-Agent: pytest\r\n"
    if body:
        head += f"Content-Type: application/json\r\nContent-Length: {len(body.encode())}\r\n"
    return (head + "\r\n" + body).encode("utf-8")


def split_response(raw: bytes) -> Tuple[str, str, str]:
    """Split a raw response into (status line, header block, body)."""
    text = raw.decode("utf-8")
    head, _, body = text.partition("\r\n\r\n")
    status_line, _, headers = head.partition("\r\n")
    return status_line, headers, body


@pytest.fixture
def sample_create_request() -> bytes:
    """Sample POST /users with a complete JSON body."""
    return build_request(
        "POST /users",
        '{"name":"Ana","email":"ana@x.com","age":30,"phone":"555"}',
    )


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample GET for a single user."""
    return build_request("GET /users/1")


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """SQLite file database, fresh for every test."""
    return f"sqlite:///{tmp_path / 'users.db'}"


@pytest.fixture
def engine(database_url: str):
    """Engine with the users table already created."""
    engine = make_engine(database_url)
    init_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def handlers(engine) -> UserHandlers:
    return UserHandlers(engine)


@pytest.fixture
def make_request() -> Callable[..., UserRequest]:
    """Build a classified UserRequest from a request line and body."""
    def _make(request_line: str, body: str = "") -> UserRequest:
        return parse_request(build_request(request_line, body))
    return _make


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


class TestServer:
    """Test server helper that runs in a background thread."""

    __test__ = False

    def __init__(self, server: UserServer, port: int):
        self.server = server
        self.port = port
        self._thread: threading.Thread = None

    def start(self):
        """Start server in background thread."""
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()

        if not self.server.socket_server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        """Stop the server."""
        self.server.shutdown()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def send(self, raw: bytes) -> bytes:
        """Send raw request bytes and read the response until the server closes."""
        with socket.create_connection(('127.0.0.1', self.port), timeout=5.0) as s:
            s.sendall(raw)
            chunks = []
            while True:
                chunk = s.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        return b"".join(chunks)

    def request(self, request_line: str, body: str = "") -> Tuple[str, str, str]:
        """Send a request and return (status line, headers, body)."""
        return split_response(self.send(build_request(request_line, body)))


@pytest.fixture
def test_server(free_port: int, database_url: str) -> Generator[TestServer, None, None]:
    """Run a real server on a free port against a fresh SQLite database."""
    server = UserServer(ServerConfig(
        host="127.0.0.1",
        port=free_port,
        database_url=database_url,
        timeout=5.0,
        log_level="WARNING",
    ))

    test_srv = TestServer(server, free_port)
    test_srv.start()

    yield test_srv

    test_srv.stop()
