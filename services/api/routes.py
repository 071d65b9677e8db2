"""
Users API routes.

One handler per route. Handlers are plain (sync) functions, so FastAPI runs
them in its worker thread pool while they block on the database. The
repository and tracer are resolved per request from the application state.
"""

import orjson
from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from services.api.repository import UserRepository
from services.api.tracing import OperationTracer
from utils.errors import ParseError
from utils.schemas import User, UserPayload

DELETED_MESSAGE = "User deleted successfully"

router = APIRouter(prefix="/users", tags=["users"])


def get_repository(request: Request) -> UserRepository:
    return request.app.state.repository


def get_tracer(request: Request) -> OperationTracer:
    return request.app.state.tracer


async def read_user_payload(request: Request) -> UserPayload:
    """Parse the request body into a UserPayload.

    A bare `null` body is read as an empty object.

    Raises:
        ParseError: If the body is not a JSON object with string fields
    """
    body = await request.body()
    try:
        data = orjson.loads(body)
        return UserPayload.model_validate({} if data is None else data)
    except (orjson.JSONDecodeError, ValidationError) as e:
        raise ParseError(str(e)) from e


@router.get("", response_model=list[User])
def list_users(
    repository: UserRepository = Depends(get_repository),
    tracer: OperationTracer = Depends(get_tracer),
) -> list[User]:
    """List all users."""
    return tracer.run("list_users", repository.list_users)


@router.get("/{user_id}", response_model=User)
def get_user(
    user_id: str,
    repository: UserRepository = Depends(get_repository),
    tracer: OperationTracer = Depends(get_tracer),
) -> User:
    """Get user by ID."""
    return tracer.run("get_user", repository.get_user, user_id)


@router.post("", response_model=User)
def create_user(
    payload: UserPayload = Depends(read_user_payload),
    repository: UserRepository = Depends(get_repository),
    tracer: OperationTracer = Depends(get_tracer),
) -> User:
    """Create a new user; the database assigns the id."""
    return tracer.run("create_user", repository.create_user, payload.name, payload.email)


@router.put("/{user_id}", response_model=User)
def update_user(
    user_id: str,
    payload: UserPayload = Depends(read_user_payload),
    repository: UserRepository = Depends(get_repository),
    tracer: OperationTracer = Depends(get_tracer),
) -> User:
    """Overwrite a user's name and email."""
    return tracer.run("update_user", repository.update_user, user_id, payload.name, payload.email)


@router.delete("/{user_id}", response_model=str)
def delete_user(
    user_id: str,
    repository: UserRepository = Depends(get_repository),
    tracer: OperationTracer = Depends(get_tracer),
) -> str:
    """Delete a user."""
    tracer.run("delete_user", repository.delete_user, user_id)
    return DELETED_MESSAGE
