"""
=============================================================================
USER RESOURCE HANDLERS
=============================================================================

The five operations of the users resource. Each handler:

1. Parses what it needs from the UserRequest (id, JSON body)
2. Opens its OWN database connection (session_scope, NullPool)
3. Runs exactly one SQL statement
4. Maps the outcome to a response

=============================================================================
OUTCOMES
=============================================================================

    ┌──────────┬──────────────────────────┬────────────────────────────────┐
    │ Handler  │ 200 body                 │ Failures                       │
    ├──────────┼──────────────────────────┼────────────────────────────────┤
    │ create   │ Usuario creado           │ 500 bad JSON / DB error        │
    │ read_one │ {"id":..,"edad":..}      │ 404 no row; 500 bad id / DB    │
    │ read_all │ [{...}, ...] or []       │ 500 DB error                   │
    │ update   │ Usuario actualizado      │ 500 bad id / bad JSON / DB     │
    │ delete   │ Usuario eliminado        │ 404 0 rows; 500 bad id / DB    │
    └──────────┴──────────────────────────┴────────────────────────────────┘

update does not look at the affected-row count: updating a missing id
still answers 200. Only read_one and delete report 404.

Input problems (malformed JSON, non-integer id) are answered with 500,
the same as database failures.

=============================================================================
"""

import logging

from pydantic import ValidationError
from sqlalchemy import delete, exc, select, update
from sqlalchemy.engine import Engine

from ..db import User, session_scope
from ..http import (
    HTTPResponse,
    InvalidUserId,
    RouteKind,
    Router,
    UserRequest,
    internal_error,
    not_found,
    ok,
    parse_user_id,
)
from ..schemas import UserOut, UserPayload, users_to_json


logger = logging.getLogger(__name__)


USER_CREATED = "Usuario creado"
USER_UPDATED = "Usuario actualizado"
USER_DELETED = "Usuario eliminado"
USER_NOT_FOUND = "Usuario no encontrado"

# Client input errors, answered with 500 like database errors.
INPUT_ERRORS = (ValidationError, InvalidUserId)


class UserHandlers:
    """
    Handlers for /users and /users/<id>.

    Usage:
        handlers = UserHandlers(make_engine(config.database_url))
        handlers.register(router)
    """

    def __init__(self, engine: Engine):
        """
        Args:
            engine: Engine used to open one connection per invocation.
        """
        self.engine = engine

    def register(self, router: Router) -> Router:
        """Add all five handlers to the router."""
        return (router
            .add(RouteKind.CREATE, self.create)
            .add(RouteKind.READ_ONE, self.read_one)
            .add(RouteKind.READ_ALL, self.read_all)
            .add(RouteKind.UPDATE, self.update)
            .add(RouteKind.DELETE, self.delete))

    # =========================================================================
    # CREATE: POST /users
    # =========================================================================

    def create(self, request: UserRequest) -> HTTPResponse:
        """
        Insert a new user from the JSON body.

        The database assigns the id; an "id" key in the body is ignored.
        """
        try:
            payload = UserPayload.model_validate_json(request.body)
            with session_scope(self.engine) as session:
                session.add(User(**payload.model_dump()))
        except INPUT_ERRORS as e:
            logger.warning(f"Rejected create payload: {e}")
            return internal_error()
        except exc.SQLAlchemyError as e:
            logger.error(f"Database error creating user: {e}")
            return internal_error()

        return ok(USER_CREATED)

    # =========================================================================
    # READ: GET /users/<id> and GET /users
    # =========================================================================

    def read_one(self, request: UserRequest) -> HTTPResponse:
        """Return one user as JSON, or 404 if no row has that id."""
        try:
            user_id = parse_user_id(request.user_id)
            with session_scope(self.engine) as session:
                user = session.get(User, user_id)
                view = UserOut.model_validate(user) if user is not None else None
        except InvalidUserId as e:
            logger.warning(str(e))
            return internal_error()
        except exc.SQLAlchemyError as e:
            logger.error(f"Database error reading user {request.user_id}: {e}")
            return internal_error()

        if view is None:
            return not_found(USER_NOT_FOUND)
        return ok(view.to_json())

    def read_all(self, request: UserRequest) -> HTTPResponse:
        """Return every user as a JSON array, ordered by id."""
        try:
            with session_scope(self.engine) as session:
                rows = session.scalars(select(User).order_by(User.id)).all()
                views = [UserOut.model_validate(row) for row in rows]
        except exc.SQLAlchemyError as e:
            logger.error(f"Database error listing users: {e}")
            return internal_error()

        return ok(users_to_json(views))

    # =========================================================================
    # UPDATE: PUT /users/<id>
    # =========================================================================

    def update(self, request: UserRequest) -> HTTPResponse:
        """
        Overwrite every mutable column of the user.

        Optional fields missing from the body are set to NULL.
        """
        try:
            user_id = parse_user_id(request.user_id)
            payload = UserPayload.model_validate_json(request.body)
            with session_scope(self.engine) as session:
                result = session.execute(
                    update(User)
                    .where(User.id == user_id)
                    .values(**payload.model_dump())
                )
                matched = result.rowcount
        except INPUT_ERRORS as e:
            logger.warning(f"Rejected update for user {request.user_id!r}: {e}")
            return internal_error()
        except exc.SQLAlchemyError as e:
            logger.error(f"Database error updating user {request.user_id}: {e}")
            return internal_error()

        if matched == 0:
            logger.warning(f"Update matched no rows for user {user_id}")
        return ok(USER_UPDATED)

    # =========================================================================
    # DELETE: DELETE /users/<id>
    # =========================================================================

    def delete(self, request: UserRequest) -> HTTPResponse:
        """Delete the user; 404 when the affected-row count is zero."""
        try:
            user_id = parse_user_id(request.user_id)
            with session_scope(self.engine) as session:
                result = session.execute(delete(User).where(User.id == user_id))
                deleted = result.rowcount
        except InvalidUserId as e:
            logger.warning(str(e))
            return internal_error()
        except exc.SQLAlchemyError as e:
            logger.error(f"Database error deleting user {request.user_id}: {e}")
            return internal_error()

        if deleted == 0:
            return not_found(USER_NOT_FOUND)
        return ok(USER_DELETED)
