"""
Tailors Backend - Auth Service
==============================

What:  Exchanges the shop's username and password for a bearer token.
How:   Compares against ADMIN_USERNAME and the bcrypt ADMIN_PASSWORD_HASH
       from Settings, then signs a token with ``issue_token``.

With no password hash configured every login is refused.
"""

import hmac
import logging

from tailors.config import Settings
from tailors.exceptions import InvalidCredentialsError
from tailors.schemas.common import LoginRequest, TokenResponse
from tailors.security import issue_token, verify_password

logger = logging.getLogger(__name__)


class AuthService:

    def __init__(self, settings: Settings):
        self.settings = settings

    def login(self, credentials: LoginRequest) -> TokenResponse:
        """
        Raises:
            InvalidCredentialsError: unknown user, wrong password, or login
            disabled because no password hash is configured.
        """
        settings = self.settings
        if not settings.admin_password_hash:
            logger.warning("Login refused: ADMIN_PASSWORD_HASH is not configured")
            raise InvalidCredentialsError()

        username_ok = hmac.compare_digest(
            credentials.username.encode("utf-8"),
            settings.admin_username.encode("utf-8"),
        )
        password_ok = verify_password(credentials.password, settings.admin_password_hash)
        if not (username_ok and password_ok):
            logger.warning("Login failed for username '%s'", credentials.username)
            raise InvalidCredentialsError()

        token = issue_token(
            subject=settings.admin_username,
            secret=settings.jwt_secret,
            expires_minutes=settings.jwt_expire_minutes,
            algorithm=settings.jwt_algorithm,
            extra={"role": "admin"},
        )
        logger.info("Login succeeded for '%s'", settings.admin_username)
        return TokenResponse(
            token=token,
            expires_in=settings.jwt_expire_minutes * 60,
            user={"username": settings.admin_username, "role": "admin"},
        )
