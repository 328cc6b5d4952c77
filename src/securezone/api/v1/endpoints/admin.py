"""Administrator endpoints for account management."""

from fastapi import APIRouter

from securezone.api.v1.dependencies import AdminDep, SessionDep, VoteLedgerDep
from securezone.schemas.common import MessageResponse
from securezone.schemas.user import AuthResponse, UsernameRequest, UserResponse
from securezone.services import users as user_service

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/dashboard", response_model=AuthResponse)
async def admin_dashboard(admin: AdminDep) -> AuthResponse:
    """Confirm the caller may use the admin dashboard."""
    return AuthResponse(
        message="Admin dashboard accessed successfully",
        user=UserResponse.model_validate(admin),
    )


@router.get("/users", response_model=list[UserResponse])
async def list_users(admin: AdminDep, db: SessionDep) -> list[UserResponse]:
    return [UserResponse.model_validate(user) for user in user_service.list_users(db)]


@router.post("/ban-user", response_model=MessageResponse)
async def ban_user(payload: UsernameRequest, admin: AdminDep, db: SessionDep) -> MessageResponse:
    user_service.ban_user(db, payload.username)
    return MessageResponse(message=f"User {payload.username} has been banned")


@router.post("/promote-to-moderator", response_model=MessageResponse)
async def promote_to_moderator(
    payload: UsernameRequest,
    admin: AdminDep,
    db: SessionDep,
) -> MessageResponse:
    user_service.promote_to_moderator(db, payload.username)
    return MessageResponse(message=f"User {payload.username} has been promoted to moderator")


@router.delete("/users/{username}", response_model=MessageResponse)
async def delete_user(
    username: str,
    admin: AdminDep,
    db: SessionDep,
    ledger: VoteLedgerDep,
) -> MessageResponse:
    """Delete an account, its reports and its votes."""
    user_service.delete_user(db, ledger, username)
    return MessageResponse(message=f"User {username} has been deleted")
