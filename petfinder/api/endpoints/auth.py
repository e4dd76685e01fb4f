"""
Auth endpoints - registration, login, current user and profile updates.
"""

from fastapi import APIRouter, status

from petfinder.core.dependencies import CurrentUser, UserSvc
from petfinder.core.exceptions import UnauthorizedError
from petfinder.core.security import issue_user_token
from petfinder.schemas.user import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    ProfileUpdate,
    UserCreate,
    UserResponse,
)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(data: UserCreate, users: UserSvc):
    """Create account and log it in. 400 if the email is already registered."""
    user = await users.register(data)
    return AuthResponse(
        message="User created successfully",
        token=issue_user_token(user.id, user.email),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(data: LoginRequest, users: UserSvc):
    user = await users.authenticate(data.email, data.password)
    if not user:
        raise UnauthorizedError("Invalid credentials")
    return AuthResponse(
        message="Login successful",
        token=issue_user_token(user.id, user.email),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def me(user: CurrentUser):
    return UserResponse.model_validate(user)


@router.api_route("/profile", methods=["PUT", "PATCH"], response_model=ProfileResponse)
async def update_profile(data: ProfileUpdate, user: CurrentUser, users: UserSvc):
    """Partial profile update; omitted fields are left unchanged."""
    user = await users.update_profile(user, data)
    return ProfileResponse(
        message="Profile updated successfully",
        user=UserResponse.model_validate(user),
    )
