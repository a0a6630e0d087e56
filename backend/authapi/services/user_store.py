import logging
from typing import Any, Dict, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from authapi.core.exceptions import UniquenessError, field_error
from authapi.core.security import generate_access_token, generate_user_id
from authapi.models.user import User

logger = logging.getLogger(__name__)

UNIQUE_FIELDS = ("name", "email")


class UserStore:
    """
    Persistence for User records.

    The store owns every write to the users table. Uniqueness of name and
    email is enforced by the database constraints, so concurrent creates
    with the same value produce at most one record.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def create(self, name: str, email: str, password_hash: str) -> User:
        """
        Insert a new user with a freshly generated id and access token.

        Raises UniquenessError if name or email already exists; nothing is
        persisted in that case.
        """
        with self._session_factory() as db:
            # Explicit check gives a clear error for the common case
            errors = self._collisions(db, name=name, email=email)
            if errors:
                raise UniquenessError(errors=errors)

            user = User(
                id=generate_user_id(),
                name=name,
                email=email,
                hashed_password=password_hash,
                access_token=generate_access_token(),
            )
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                # Another request won the race between the check and the insert
                db.rollback()
                errors = self._collisions(db, name=name, email=email)
                logger.warning(f"Unique constraint rejected user insert for fields: {sorted(errors)}")
                raise UniquenessError(errors=errors)
            db.refresh(user)
            return user

    def find_by_email(self, email: str) -> Optional[User]:
        with self._session_factory() as db:
            return db.query(User).filter(User.email == email).first()

    def find_by_access_token(self, token: str) -> Optional[User]:
        with self._session_factory() as db:
            return db.query(User).filter(User.access_token == token).first()

    def count(self) -> int:
        with self._session_factory() as db:
            return db.query(func.count(User.id)).scalar()

    @staticmethod
    def _collisions(db: Session, **values: Any) -> Dict[str, Any]:
        """Return an error entry for each unique field whose value is already taken"""
        errors = {}
        for field in UNIQUE_FIELDS:
            value = values[field]
            if db.query(User.id).filter(getattr(User, field) == value).first() is not None:
                errors[field] = field_error(
                    field,
                    "unique",
                    f"{field.capitalize()} is already registered",
                    value,
                )
        return errors
