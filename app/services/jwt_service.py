"""
JWT Service for access and refresh token generation and validation
"""
import jwt
from datetime import datetime, timedelta, timezone
from typing import Dict, Any

from app.core.config import settings
from atams.exceptions import UnauthorizedException

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class JwtService:
    def __init__(self) -> None:
        self.access_secret = settings.JWT_SECRET
        self.refresh_secret = settings.JWT_REFRESH_SECRET
        self.algorithm = settings.JWT_ALG
        self.access_expires_in = settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
        self.refresh_expires_in = settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 3600

    def create_access_token(self, user_id: str, role: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "role": role,
            "type": ACCESS_TOKEN_TYPE,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=self.access_expires_in)).timestamp())
        }
        return jwt.encode(payload, self.access_secret, algorithm=self.algorithm)

    def create_refresh_token(self, user_id: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "type": REFRESH_TOKEN_TYPE,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=self.refresh_expires_in)).timestamp())
        }
        return jwt.encode(payload, self.refresh_secret, algorithm=self.algorithm)

    def create_token_pair(self, user_id: str, role: str) -> Dict[str, Any]:
        """
        Generate access + refresh tokens for a user

        Returns:
            dict: {access_token, refresh_token, token_type, expires_in}
        """
        return {
            "access_token": self.create_access_token(user_id, role),
            "refresh_token": self.create_refresh_token(user_id),
            "token_type": "bearer",
            "expires_in": self.access_expires_in
        }

    def _decode(self, token: str, secret: str, expected_type: str) -> Dict[str, Any]:
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]}
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedException("Token expired")
        except jwt.InvalidTokenError:
            raise UnauthorizedException("Invalid token")

        if payload.get("type") != expected_type:
            raise UnauthorizedException("Invalid token type")

        return payload

    def verify_access_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode an access token from the Authorization header

        Raises:
            UnauthorizedException: If token is invalid, expired or not an access token
        """
        return self._decode(token, self.access_secret, ACCESS_TOKEN_TYPE)

    def verify_refresh_token(self, token: str) -> Dict[str, Any]:
        """Verify and decode a refresh token"""
        return self._decode(token, self.refresh_secret, REFRESH_TOKEN_TYPE)
