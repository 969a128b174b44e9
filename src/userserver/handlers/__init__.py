"""
=============================================================================
REQUEST HANDLERS
=============================================================================

UserHandlers implements the users resource:

    POST   /users       create
    GET    /users/<id>  read_one
    GET    /users       read_all
    PUT    /users/<id>  update
    DELETE /users/<id>  delete

=============================================================================
USAGE
=============================================================================

    from userserver.handlers import UserHandlers

    handlers = UserHandlers(engine)
    handlers.register(router)

=============================================================================
"""

from .users import (
    UserHandlers,
    USER_CREATED,
    USER_UPDATED,
    USER_DELETED,
    USER_NOT_FOUND,
)

__all__ = [
    "UserHandlers",
    "USER_CREATED",
    "USER_UPDATED",
    "USER_DELETED",
    "USER_NOT_FOUND",
]
