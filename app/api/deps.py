"""
API Dependencies
Handles authentication and authorization with locally issued JWT access tokens

Usage in endpoints:
    @router.get("/events/mine", dependencies=[Depends(require_min_role_level(50))])
    async def my_events(current_user: dict = Depends(require_auth)):
        ...
"""
from typing import Optional, List
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.enums import ROLE_LEVELS, UserRole
from app.repositories.user_repository import UserRepository
from app.services.jwt_service import JwtService
from app.services.notification_service import EmailNotifier
from atams.exceptions import UnauthorizedException, ForbiddenException

# JWT Bearer token security
security = HTTPBearer(auto_error=False)

jwt_service = JwtService()
user_repo = UserRepository()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> Optional[dict]:
    """
    Resolve the caller from the Bearer access token

    Returns:
        User dict with: user_id, email, role, role_level, full_name
        None if no token was sent

    Raises:
        UnauthorizedException: If the token is invalid or the user no longer exists
    """
    if not credentials:
        return None

    payload = jwt_service.verify_access_token(credentials.credentials)
    user = user_repo.get(db, payload["sub"])
    if not user:
        raise UnauthorizedException("User no longer exists")

    role = UserRole(user.u_role)
    return {
        "user_id": user.u_id,
        "email": user.u_email,
        "role": role.value,
        "role_level": ROLE_LEVELS[role],
        "full_name": user.full_name
    }


def require_auth(current_user: Optional[dict] = Depends(get_current_user)) -> dict:
    """
    Require authenticated user

    Raises:
        UnauthorizedException 401 if user not authenticated
    """
    if not current_user:
        raise UnauthorizedException("Not authenticated")
    return current_user


def require_roles(*roles: UserRole):
    """
    Require user to have one of the given roles

    Example usage:
        @router.get("/analytics/admin", dependencies=[Depends(require_roles(UserRole.ADMIN))])
    """
    allowed: List[str] = [r.value for r in roles]

    def _check_role(current_user: dict = Depends(require_auth)):
        if current_user["role"] not in allowed:
            raise ForbiddenException(f"Insufficient permission. Required role: {allowed}")

    return _check_role


def require_min_role_level(min_level: int):
    """
    Require user to have minimum role level (STUDENT=1, ORGANIZER=50, ADMIN=100)

    This is the FIRST level validation at route level.
    Ownership checks live in the service layer.
    """
    def _check_min_level(current_user: dict = Depends(require_auth)):
        if current_user.get("role_level", 0) < min_level:
            raise ForbiddenException(
                f"Insufficient permission. Required minimum role level: {min_level}"
            )

    return _check_min_level


def get_notifier(request: Request) -> EmailNotifier:
    """Notifier created at startup"""
    return request.app.state.notifier
