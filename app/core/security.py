"""
Security Module - Password hashing and signed session tokens
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

# Password hashing context - bcrypt with configurable cost factor
pwd_context = CryptContext(
    schemes=["bcrypt"],  # Salted, deliberately slow one-way hash
    deprecated="auto",  # Flag hashes made with outdated settings
    bcrypt__rounds=settings.BCRYPT_ROUNDS  # Cost factor (higher = slower)
)

def hash_password(password: str) -> str:
    """
    Hash a plaintext password using bcrypt.

    A fresh salt is generated on every call, so hashing the same password
    twice yields two different strings that both verify.

    Args:
        password: Plaintext password from user input

    Returns:
        Hashed password string (safe to store in database)

    Example:
        hashed = hash_password("longpass1")
        # Returns: $2b$12$abc...xyz (60 characters)
    """
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against a bcrypt hash.

    Args:
        plain_password: Password provided by the caller
        hashed_password: Stored hash from database

    Returns:
        True if password matches, False otherwise (including unreadable hashes)
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)  # Constant-time comparison
    except (ValueError, TypeError) as e:
        logger.error(f"❌ Password verification error: {str(e)}")
        return False  # Corrupted hash never grants access

def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issue a signed access token for a subject.

    Payload:
        sub: the subject (user email)
        iat: issue time
        exp: expiry time - evaluated lazily whenever the token is decoded

    Args:
        subject: Identity to embed in the token
        expires_delta: Optional custom lifetime (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Signed JWT string

    Example:
        token = create_access_token("a@x.com")
        # Returns: eyJhbGc...xyz
    """
    issued_at = datetime.now(timezone.utc)

    if expires_delta is not None:
        expire = issued_at + expires_delta
    else:
        expire = issued_at + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {"sub": subject, "iat": issued_at, "exp": expire}

    encoded_jwt = jwt.encode(
        to_encode,
        settings.SECRET_KEY,  # Process-wide signing secret
        algorithm=settings.ALGORITHM
    )

    logger.debug(f"✅ Created access token expiring at {expire}")
    return encoded_jwt

def verify_token(token: str) -> Optional[dict]:
    """
    Verify signature, algorithm and expiry of a token.

    Returns:
        Decoded payload dict if valid, None otherwise

    The cause of a failure (expired, tampered, malformed) is only logged.
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]  # Only accept the configured algorithm
        )

    except jwt.ExpiredSignatureError:
        logger.warning("⚠️  Token expired")
        return None

    except JWTError as e:
        logger.warning(f"⚠️  Invalid token: {str(e)}")
        return None

def decode_token(token: str) -> Optional[str]:
    """
    Validate a token and extract its subject.

    Returns:
        The subject (user email) if the token is valid, None otherwise

    Usage:
        email = decode_token(token)
        if email is None:
            # treat caller as anonymous
    """
    payload = verify_token(token)
    if not payload:
        return None

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        logger.warning("⚠️  Token without a usable subject")
        return None
    return subject
