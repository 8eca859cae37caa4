"""User records API router.

Handlers only translate between HTTP and the user service; business errors
propagate as ``UserServiceError`` and are mapped to status codes by the
application's exception handler.
"""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field

from src.app.api.http.deps import get_user_service
from src.app.core.services import UserService
from src.app.entities.core.user import User

router = APIRouter(prefix="/users", tags=["users"])


class CreateUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")


class UpdateUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")


class UserResponse(BaseModel):
    user: User


class UserListResponse(BaseModel):
    users: list[User]


@router.get("", response_model=UserListResponse)
def list_users(service: UserService = Depends(get_user_service)) -> UserListResponse:
    """List all users."""
    return UserListResponse(users=service.fetch_all())


@router.get("/{email}", response_model=UserResponse)
def get_user(
    email: str,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Get a user by email."""
    return UserResponse(user=service.fetch_one(email))


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_user(
    request: CreateUserRequest,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Register a new user."""
    user = User(
        email=request.email,
        first_name=request.first_name,
        last_name=request.last_name,
    )
    return UserResponse(user=service.create(user))


@router.put("/{email}", response_model=UserResponse)
def update_user(
    email: str,
    request: UpdateUserRequest,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Update a user's names; empty fields are left unchanged."""
    user = User(
        email=email,
        first_name=request.first_name,
        last_name=request.last_name,
    )
    return UserResponse(user=service.update(user))


@router.delete("/{email}", response_model=UserResponse)
def delete_user(
    email: str,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Delete a user and return the deleted record."""
    return UserResponse(user=service.delete(email))
