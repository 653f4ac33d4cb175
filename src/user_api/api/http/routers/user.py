"""User API router with CRUD operations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status
from fastapi.responses import PlainTextResponse

from src.user_api.api.http.deps import get_user_store
from src.user_api.api.http.schemas import UserDTO, from_dto, to_dto
from src.user_api.core.services import UserStore

HEALTH_MESSAGE = "API is running"

router = APIRouter(prefix="/api/user", tags=["users"])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"description": "User not found"}}

# Identifiers are 64-bit integers in storage
UserId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]


# Registered before /{user_id} so the literal path wins
@router.get("/showhealth", response_class=PlainTextResponse)
def show_health() -> str:
    """Liveness probe; never touches the store."""
    return HEALTH_MESSAGE


@router.get("", response_model=list[UserDTO])
def list_users(store: UserStore = Depends(get_user_store)) -> list[UserDTO]:
    """List all users."""
    return [to_dto(user) for user in store.get_all_users()]


@router.get("/{user_id}", response_model=UserDTO, responses=_NOT_FOUND)
def get_user(
    user_id: UserId,
    store: UserStore = Depends(get_user_store),
) -> UserDTO | Response:
    """Get a user by ID."""
    user = store.get_user_by_id(user_id)
    if user is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return to_dto(user)


@router.post("", response_model=UserDTO, status_code=status.HTTP_201_CREATED)
def create_user(
    user_dto: UserDTO,
    store: UserStore = Depends(get_user_store),
) -> UserDTO:
    """Create a new user; the store assigns the ID."""
    created_user = store.create_user(from_dto(user_dto))
    return to_dto(created_user)


@router.put("/{user_id}", response_model=UserDTO, responses=_NOT_FOUND)
def update_user(
    user_id: UserId,
    user_dto: UserDTO,
    store: UserStore = Depends(get_user_store),
) -> UserDTO | Response:
    """Replace a user's fields."""
    updated_user = store.update_user(user_id, from_dto(user_dto))
    if updated_user is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return to_dto(updated_user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
def delete_user(
    user_id: UserId,
    store: UserStore = Depends(get_user_store),
) -> Response:
    """Delete a user."""
    if store.delete_user(user_id):
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return Response(status_code=status.HTTP_404_NOT_FOUND)
