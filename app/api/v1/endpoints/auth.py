"""
Auth Endpoints - Registration, login, token refresh and profile
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.auth_service import AuthService
from app.schemas import (
    User,
    UserRegister,
    LoginRequest,
    RefreshRequest,
    TokenPair,
    AuthResponse,
    DataResponse
)
from app.api.deps import require_auth
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
auth_service = AuthService()


@router.post(
    "/register",
    response_model=DataResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED
)
async def register(
    payload: UserRegister,
    db: Session = Depends(get_db)
):
    """
    Register a new student or organizer account

    **Errors:**
    - 409: Email already registered
    - 422: Invalid input
    """
    result = auth_service.register(db, payload)
    return DataResponse(
        success=True,
        message="Registration successful",
        data=result
    )


@router.post(
    "/login",
    response_model=DataResponse[AuthResponse],
    status_code=status.HTTP_200_OK
)
async def login(
    payload: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Login with email and password

    **Response:**
    - User profile
    - Access token (short lived) and refresh token
    """
    result = auth_service.login(db, payload.email, payload.password)
    return DataResponse(
        success=True,
        message="Login successful",
        data=result
    )


@router.post(
    "/refresh",
    response_model=DataResponse[TokenPair],
    status_code=status.HTTP_200_OK
)
async def refresh(
    payload: RefreshRequest,
    db: Session = Depends(get_db)
):
    """Exchange a refresh token for a new token pair"""
    tokens = auth_service.refresh(db, payload.refresh_token)
    return DataResponse(
        success=True,
        message="Token refreshed successfully",
        data=tokens
    )


@router.get(
    "/me",
    status_code=status.HTTP_200_OK
)
async def get_me(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get current user's profile

    **Authentication:**
    - Requires valid access token
    """
    profile = auth_service.get_profile(db, current_user["user_id"])
    response = DataResponse[User](
        success=True,
        message="Profile retrieved successfully",
        data=profile
    )
    return encrypt_response_data(response, settings)
