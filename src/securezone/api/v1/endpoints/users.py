"""User profile endpoints."""

from fastapi import APIRouter

from securezone.api.v1.dependencies import CurrentUserDep, SessionDep
from securezone.schemas.user import AuthResponse, ProfileUpdate, UserResponse
from securezone.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def read_me(current_user: CurrentUserDep) -> UserResponse:
    """Return the authenticated account."""
    return UserResponse.model_validate(current_user)


@router.put("/me", response_model=AuthResponse)
async def update_me(
    payload: ProfileUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> AuthResponse:
    """Change the caller's username and/or password."""
    user = user_service.update_profile(
        db,
        current_user,
        username=payload.username,
        password=payload.password,
    )
    return AuthResponse(
        message="Profile updated successfully",
        user=UserResponse.model_validate(user),
    )


@router.get("/{email}", response_model=AuthResponse)
async def read_profile(email: str, db: SessionDep, current_user: CurrentUserDep) -> AuthResponse:
    """Look up a profile by email."""
    user = user_service.get_profile(db, email)
    return AuthResponse(
        message=f"Profile for {user.username}",
        user=UserResponse.model_validate(user),
    )
