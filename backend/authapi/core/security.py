import secrets
import uuid
from passlib.context import CryptContext

# 128 random bytes, hex-encoded into a 256 character token
ACCESS_TOKEN_BYTES = 128

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72

DEFAULT_BCRYPT_ROUNDS = 12


def build_password_context(rounds: int = DEFAULT_BCRYPT_ROUNDS) -> CryptContext:
    """Create a CryptContext that hashes passwords using bcrypt"""
    # bcrypt is slow by design to prevent brute-force attacks
    # 'deprecated="auto"' lets passlib flag hashes made with outdated settings
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def password_fits_bcrypt(password: str) -> bool:
    """Check that bcrypt will compare the whole password, not a truncated prefix"""
    return len(password.encode("utf-8")) <= BCRYPT_MAX_PASSWORD_BYTES


def password_has_nul(password: str) -> bool:
    """bcrypt cannot hash passwords containing a NUL character"""
    return "\x00" in password


def get_password_hash(password: str, context: CryptContext) -> str:
    """Hash a password using bcrypt"""
    # bcrypt generates a salt and includes it in the hash
    # so the same password produces different hashes
    return context.hash(password)


def verify_password(plain_password: str, hashed_password: str, context: CryptContext) -> bool:
    """Verify a password against a hash using constant-time comparison"""
    if not password_fits_bcrypt(plain_password) or password_has_nul(plain_password):
        return False
    return context.verify(plain_password, hashed_password)


def generate_access_token(num_bytes: int = ACCESS_TOKEN_BYTES) -> str:
    """Generate an opaque bearer token from a cryptographically strong source"""
    return secrets.token_hex(num_bytes)


def generate_user_id() -> str:
    """Generate an opaque user identifier"""
    return uuid.uuid4().hex
