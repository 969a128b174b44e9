"""
Persistence layer: the User model and the helpers that open one database
connection per request.
"""

from .models import Base, User
from .database import SchemaInitError, make_engine, init_schema, session_scope

__all__ = [
    "Base",
    "User",
    "SchemaInitError",
    "make_engine",
    "init_schema",
    "session_scope",
]
