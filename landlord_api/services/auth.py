"""
Authentication service for registration, login and token resolution.
Handles password hashing, credential checks and mapping JWTs back to users.
"""

from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from email_validator import validate_email, EmailNotValidError
from landlord_api.config import settings
from landlord_api.repositories.user import UserRepository, normalize_email
from landlord_api.models.user import User, UserRole
from landlord_api.utils.auth import (
    create_access_token,
    hash_password,
    verify_password,
    verify_token
)
from landlord_api.utils.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidTokenError,
    ValidationError
)
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for managing accounts and access tokens.
    Passwords are stored only as bcrypt hashes.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def register(self, email: str, password: str, name: str) -> User:
        """
        Create a new account.

        Args:
            email: Email address, compared case-insensitively
            password: Plain text password
            name: Display name

        Returns:
            Created User object

        Raises:
            ValidationError: If any field is missing or malformed
            DuplicateEmailError: If the email is already registered
        """
        if not email or not email.strip():
            raise ValidationError("Email is required")
        if not name or not name.strip():
            raise ValidationError("Name is required")
        if not password:
            raise ValidationError("Password is required")

        try:
            validate_email(email.strip(), check_deliverability=False)
        except EmailNotValidError as e:
            raise ValidationError(f"Invalid email format: {e}")

        if len(password) < settings.password_min_length:
            raise ValidationError(
                f"Password must be at least {settings.password_min_length} characters long"
            )

        email = normalize_email(email)
        if await self.user_repo.email_exists(email):
            logger.warning(f"Registration rejected, email already registered: {email}")
            raise DuplicateEmailError(email)

        user = await self.user_repo.create_user({
            "email": email,
            "password_hash": hash_password(password),
            "name": name.strip(),
            "role": UserRole.USER,
        })

        logger.info(f"User registered: {user.email} (ID: {user.id})")
        return user

    async def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user when the credentials match, otherwise None."""
        if not email or not password:
            return None

        user = await self.user_repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"Failed authentication attempt for email: {email}")
            return None

        return user

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate and issue an access token.

        Returns:
            Tuple of (user, access_token)

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        user = await self.authenticate(email, password)
        if user is None:
            raise InvalidCredentialsError()

        token = create_access_token(user_id=user.id, role=user.role.value)
        logger.info(f"User logged in: {user.email}")
        return user, token

    async def get_current_user(self, token: str) -> User:
        """
        Resolve an access token to its user.

        Raises:
            TokenExpiredError: If the token has expired
            InvalidTokenError: If the token is malformed or the user no longer exists
        """
        payload = verify_token(token, token_type="access")

        user = await self.user_repo.get_by_id(payload.user_id)
        if user is None:
            raise InvalidTokenError("User no longer exists")

        return user
