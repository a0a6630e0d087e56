"""
Registration, login and access verification.

Passwords are hashed with bcrypt through passlib. Sessions are identified by
the opaque access token issued when the user is created; it never expires
and is never rotated.
"""

import logging
from typing import Optional
from passlib.context import CryptContext
from authapi.core.exceptions import RegistrationError, field_error
from authapi.core.security import (
    BCRYPT_MAX_PASSWORD_BYTES,
    get_password_hash,
    password_fits_bcrypt,
    password_has_nul,
    verify_password,
)
from authapi.models.user import User
from authapi.services.user_store import UserStore

logger = logging.getLogger(__name__)


class AuthService:
    """User-facing auth operations on top of a UserStore"""

    def __init__(self, store: UserStore, password_context: CryptContext):
        self.store = store
        self.password_context = password_context

    def register(self, name: str, email: str, password: str) -> User:
        """
        Create a user and return it.

        Raises RegistrationError (UniquenessError for a taken name or email).
        """
        if not password_fits_bcrypt(password):
            # Longer passwords would be silently truncated by bcrypt
            raise RegistrationError(errors={
                "password": field_error(
                    "password",
                    "maxlength",
                    f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes",
                ),
            })
        if password_has_nul(password):
            raise RegistrationError(errors={
                "password": field_error("password", "invalid", "Password must not contain NUL characters"),
            })

        # Never store plaintext passwords
        password_hash = get_password_hash(password, self.password_context)
        user = self.store.create(name=name, email=email, password_hash=password_hash)
        logger.info(f"User created with ID: {user.id}")
        return user

    def login(self, email: str, password: str) -> Optional[User]:
        """Return the user if the credentials match, None otherwise"""
        user = self.store.find_by_email(email)
        # Same outcome for unknown email and wrong password
        if user is None or not verify_password(password, user.hashed_password, self.password_context):
            logger.info("Login failed: credentials did not match")
            return None
        logger.info(f"Login successful for user_id: {user.id}")
        return user

    def verify_access(self, token: Optional[str]) -> Optional[User]:
        """Return the user owning this access token, None if nobody does"""
        if not token:
            return None
        return self.store.find_by_access_token(token)
