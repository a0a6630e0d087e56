from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from authapi.core.database import Base


class User(Base):
    """
    User model representing registered users.

    Stores authentication credentials and the user's bearer token.
    Passwords are stored as hashes (never plaintext).
    """
    __tablename__ = "users"

    # Opaque id and token are generated by UserStore.create, not by column defaults
    id = Column(String(32), primary_key=True, index=True)
    # Name and email are unique - the database enforces it atomically
    name = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    # Issued once at creation and never rotated
    access_token = Column(String(256), unique=True, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<User id={self.id} name={self.name!r}>"
