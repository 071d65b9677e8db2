"""
User Repository - Data Access Layer

Issues the five statement shapes of the users API against the `users` table.
Every statement binds its parameters; nothing is interpolated into SQL.
No retries: a failed statement is translated into the error taxonomy in
utils.errors with the raw driver message, and raised.
"""

import logging

from pydantic import ValidationError
from sqlalchemy import text
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import SQLAlchemyError

from utils.errors import DeleteError, InsertError, NotFound, QueryError, ScanError, UpdateError
from utils.schemas import User

logger = logging.getLogger(__name__)

SELECT_ALL = text("SELECT id, name, email FROM users")
SELECT_BY_ID = text("SELECT id, name, email FROM users WHERE id = :id")
INSERT_RETURNING_ID = text("INSERT INTO users (name, email) VALUES (:name, :email) RETURNING id")
UPDATE_BY_ID = text("UPDATE users SET name = :name, email = :email WHERE id = :id")
DELETE_BY_ID = text("DELETE FROM users WHERE id = :id")


def _error_text(exc: SQLAlchemyError) -> str:
    """Return the driver's own message, without SQLAlchemy's decorations."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def _scan(row: Row) -> User:
    try:
        return User.model_validate(dict(row._mapping))
    except ValidationError as e:
        raise ScanError(str(e)) from e


class UserRepository:
    """Access to the users table through a shared, pooled engine.

    The repository holds no state beyond the engine. `user_id` arguments are
    the raw path segment and are handed to the database as-is.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def list_users(self) -> list[User]:
        """Return every user, in the database's default order.

        Raises:
            QueryError: If the query fails
            ScanError: If a row cannot be converted
        """
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(SELECT_ALL).all()
        except SQLAlchemyError as e:
            raise QueryError(_error_text(e)) from e

        return [_scan(row) for row in rows]

    def get_user(self, user_id: str) -> User:
        """Return the user with the given id.

        Raises:
            NotFound: If no row matches
            QueryError: If the query fails
            ScanError: If the row cannot be converted
        """
        try:
            with self.engine.connect() as conn:
                row = conn.execute(SELECT_BY_ID, {"id": user_id}).first()
        except SQLAlchemyError as e:
            raise QueryError(_error_text(e)) from e

        if row is None:
            raise NotFound(user_id)
        return _scan(row)

    def create_user(self, name: str, email: str) -> User:
        """Insert a user and return it with its database-assigned id.

        Raises:
            InsertError: If the insert fails
        """
        try:
            with self.engine.begin() as conn:
                new_id = conn.execute(INSERT_RETURNING_ID, {"name": name, "email": email}).scalar_one()
        except SQLAlchemyError as e:
            raise InsertError(_error_text(e)) from e

        return User(id=new_id, name=name, email=email)

    def update_user(self, user_id: str, name: str, email: str) -> User:
        """Overwrite name and email, then re-read the row in the same transaction.

        The write is unconditional; a write that touches no rows means the
        user does not exist, and the transaction is rolled back.

        Raises:
            NotFound: If no row matches
            UpdateError: If the update (or its commit) fails
            QueryError: If the re-read fails
            ScanError: If the re-read row cannot be converted
        """
        try:
            with self.engine.begin() as conn:
                try:
                    result = conn.execute(UPDATE_BY_ID, {"id": user_id, "name": name, "email": email})
                except SQLAlchemyError as e:
                    raise UpdateError(_error_text(e)) from e

                if result.rowcount == 0:
                    raise NotFound(user_id)

                try:
                    row = conn.execute(SELECT_BY_ID, {"id": user_id}).first()
                except SQLAlchemyError as e:
                    raise QueryError(_error_text(e)) from e

                if row is None:
                    raise NotFound(user_id)
                return _scan(row)
        except SQLAlchemyError as e:
            raise UpdateError(_error_text(e)) from e

    def delete_user(self, user_id: str) -> None:
        """Delete the user after confirming it exists, in one transaction.

        Raises:
            NotFound: If no row matches
            QueryError: If the existence check fails
            DeleteError: If the delete (or its commit) fails
        """
        try:
            with self.engine.begin() as conn:
                # A failed existence read is a server fault (500), not a missing row
                try:
                    row = conn.execute(SELECT_BY_ID, {"id": user_id}).first()
                except SQLAlchemyError as e:
                    raise QueryError(_error_text(e)) from e

                if row is None:
                    raise NotFound(user_id)

                try:
                    conn.execute(DELETE_BY_ID, {"id": user_id})
                except SQLAlchemyError as e:
                    raise DeleteError(_error_text(e)) from e
        except SQLAlchemyError as e:
            raise DeleteError(_error_text(e)) from e

        logger.debug("Deleted user id=%s", user_id)
