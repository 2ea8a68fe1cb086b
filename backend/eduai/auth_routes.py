"""
Name: Auth Routes (JWT)

Responsibilities:
  - Self-registration and login, both returning a bearer token
  - Expose /auth/me for reading and updating the current profile
  - Password change for the current user
  - Admin-only user listing and lookup
"""

from typing import Optional

from fastapi import APIRouter, Depends

from .application import AuthService
from .container import get_auth_service
from .dependencies import require_admin, require_user
from .error_responses import OPENAPI_ERROR_RESPONSES, bad_request, not_found
from .schemas import CamelModel, UserResponse, to_user_response
from .users import SELF_REGISTRATION_ROLES, PublicUser

router = APIRouter(prefix="/auth", tags=["auth"], responses=OPENAPI_ERROR_RESPONSES)


class RegisterRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UpdateProfileRequest(CamelModel):
    name: Optional[str] = None
    avatar: Optional[str] = None


class ChangePasswordRequest(CamelModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class AuthResponse(CamelModel):
    success: bool = True
    user: UserResponse
    token: str
    message: str


class UserEnvelope(CamelModel):
    success: bool = True
    user: UserResponse
    message: Optional[str] = None


class UsersEnvelope(CamelModel):
    success: bool = True
    users: list[UserResponse]


class MessageEnvelope(CamelModel):
    success: bool = True
    message: str


@router.post("/register", response_model=AuthResponse)
def register(
    req: RegisterRequest, service: AuthService = Depends(get_auth_service)
):
    if not req.email or not req.password or not req.name:
        raise bad_request("All fields are required")
    if req.role not in {role.value for role in SELF_REGISTRATION_ROLES}:
        raise bad_request("Invalid role specified")

    result = service.register(req.email, req.password, req.name, req.role)
    return AuthResponse(
        user=to_user_response(result.user),
        token=result.token,
        message="Registration successful",
    )


@router.post("/login", response_model=AuthResponse)
def login(req: LoginRequest, service: AuthService = Depends(get_auth_service)):
    result = service.login(req.email or "", req.password or "")
    return AuthResponse(
        user=to_user_response(result.user),
        token=result.token,
        message="Login successful",
    )


@router.get("/me", response_model=UserEnvelope)
def me(user: PublicUser = Depends(require_user())):
    return UserEnvelope(
        user=to_user_response(user), message="Token verified successfully"
    )


@router.patch("/me", response_model=UserEnvelope)
def update_me(
    req: UpdateProfileRequest,
    user: PublicUser = Depends(require_user()),
    service: AuthService = Depends(get_auth_service),
):
    updated = service.update_user(user.id, name=req.name, avatar=req.avatar)
    return UserEnvelope(
        user=to_user_response(updated), message="Profile updated successfully"
    )


@router.post("/change-password", response_model=MessageEnvelope)
def change_password(
    req: ChangePasswordRequest,
    user: PublicUser = Depends(require_user()),
    service: AuthService = Depends(get_auth_service),
):
    service.change_password(
        user.id, req.current_password or "", req.new_password or ""
    )
    return MessageEnvelope(message="Password changed successfully")


@router.get("/users", response_model=UsersEnvelope)
def list_users(
    _: PublicUser = Depends(require_admin()),
    service: AuthService = Depends(get_auth_service),
):
    return UsersEnvelope(
        users=[to_user_response(user) for user in service.get_all_users()]
    )


@router.get("/users/{user_id}", response_model=UserEnvelope)
def get_user(
    user_id: str,
    _: PublicUser = Depends(require_admin()),
    service: AuthService = Depends(get_auth_service),
):
    user = service.get_user_by_id(user_id)
    if not user:
        raise not_found("User not found")
    return UserEnvelope(user=to_user_response(user))
