"""
Auth Service - Registration, login and token refresh
"""
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash, check_password_hash

from app.models.user import User as UserModel
from app.repositories.user_repository import UserRepository
from app.services.jwt_service import JwtService
from app.schemas.user import User, UserRegister, TokenPair, AuthResponse
from atams.exceptions import ConflictException, NotFoundException, UnauthorizedException
from atams.logging import get_logger

logger = get_logger(__name__)


class AuthService:
    def __init__(self) -> None:
        self.user_repo = UserRepository()
        self.jwt_service = JwtService()

    def _auth_response(self, user: UserModel) -> AuthResponse:
        tokens = self.jwt_service.create_token_pair(user.u_id, user.u_role)
        return AuthResponse(user=User.model_validate(user), tokens=TokenPair(**tokens))

    def register(self, db: Session, payload: UserRegister) -> AuthResponse:
        """
        Self registration

        Raises:
            ConflictException: If email is already registered
        """
        if self.user_repo.check_email_exists(db, payload.u_email):
            raise ConflictException("Email already registered")

        user_data = payload.model_dump(exclude={"u_password"})
        user_data["u_email"] = payload.u_email.lower()
        user_data["u_password"] = generate_password_hash(payload.u_password)
        user = self.user_repo.create(db, user_data)

        logger.info(
            "User registered",
            extra={'extra_data': {'user_id': user.u_id, 'role': user.u_role}}
        )
        return self._auth_response(user)

    def login(self, db: Session, email: str, password: str) -> AuthResponse:
        user = self.user_repo.get_by_email(db, email)
        if not user or not check_password_hash(user.u_password, password):
            logger.warning("Failed login attempt", extra={'extra_data': {'email': email}})
            raise UnauthorizedException("Invalid email or password")

        return self._auth_response(user)

    def refresh(self, db: Session, refresh_token: str) -> TokenPair:
        """Issue a new token pair from a valid refresh token"""
        payload = self.jwt_service.verify_refresh_token(refresh_token)
        user = self.user_repo.get(db, payload["sub"])
        if not user:
            raise UnauthorizedException("User no longer exists")

        return TokenPair(**self.jwt_service.create_token_pair(user.u_id, user.u_role))

    def get_profile(self, db: Session, user_id: str) -> User:
        user = self.user_repo.get(db, user_id)
        if not user:
            raise NotFoundException("User not found")
        return User.model_validate(user)
