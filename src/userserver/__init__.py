"""
=============================================================================
USERSERVER - CRUD Service for Users over Raw Sockets
=============================================================================

A small network service exposing five operations on a single "users"
table. Connections are accepted on a plain TCP socket and requests are
classified by hand: no HTTP library, no web framework.

=============================================================================
PROJECT OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    USERSERVER ARCHITECTURE                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   core/         SocketServer, Connection                            │
    │                 └─ accept one connection, read up to 1024 bytes     │
    │                                                                      │
    │   http/         RequestParser, Router, HTTPResponse                  │
    │                 └─ prefix classification, dispatch, status lines    │
    │                                                                      │
    │   handlers/     UserHandlers                                         │
    │                 └─ create, read_one, read_all, update, delete       │
    │                                                                      │
    │   db/           User model, engine, schema initialization            │
    │                 └─ SQLAlchemy, one connection per request           │
    │                                                                      │
    │   schemas.py    Pydantic request/response shapes                    │
    │   config.py     ServerConfig (DATABASE_URL, .env)                   │
    │   server.py     UserServer, the synchronous request loop            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
ENDPOINTS
=============================================================================

    POST   /users        {name, email, age?, phone?}  → 200 "Usuario creado"
    GET    /users/<id>                                → 200 JSON | 404
    GET    /users                                     → 200 JSON array
    PUT    /users/<id>   {name, email, age?, phone?}  → 200 "Usuario actualizado"
    DELETE /users/<id>                                → 200 "Usuario eliminado" | 404
    anything else                                     → 404

=============================================================================
"""

__version__ = "1.0.0"

from .server import UserServer, create_app
from .config import ServerConfig

__all__ = ["UserServer", "ServerConfig", "create_app", "__version__"]
