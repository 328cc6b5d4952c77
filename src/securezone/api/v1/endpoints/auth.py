"""Authentication endpoints for the SecureZone API."""

from fastapi import APIRouter, status

from securezone.api.v1.dependencies import SessionDep
from securezone.core.security import create_access_token
from securezone.schemas.user import (
    AuthResponse,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    UserResponse,
)
from securezone.services import users as user_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(payload: SignupRequest, db: SessionDep) -> AuthResponse:
    """Register a new account with the NORMAL role."""
    user = user_service.signup(
        db,
        email=payload.email,
        password=payload.password,
        username=payload.username,
    )
    return AuthResponse(message="Signup successful", user=UserResponse.model_validate(user))


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, db: SessionDep) -> LoginResponse:
    """Check credentials and issue a bearer token."""
    user = user_service.authenticate(db, email=payload.email, password=payload.password)
    return LoginResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
        access_token=create_access_token(user.id),
    )
