"""
Service Errors - Error Taxonomy for the Users API

Every failure the API reports is one of these exceptions. Each carries the
HTTP status code it maps to and the raw underlying error text, which is
returned to the client unchanged.
"""


class UserServiceError(Exception):
    """Base exception for all users API errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ParseError(UserServiceError):
    """Request body is not a JSON object of the expected shape."""

    status_code = 400


class QueryError(UserServiceError):
    """A read statement failed."""


class ScanError(UserServiceError):
    """A row could not be converted into a User."""


class InsertError(UserServiceError):
    """The INSERT statement failed."""


class UpdateError(UserServiceError):
    """The UPDATE statement failed."""


class DeleteError(UserServiceError):
    """The DELETE statement failed."""


class NotFound(UserServiceError):
    """No row matches the requested id."""

    status_code = 404

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"user {user_id} not found")
