from datetime import datetime, timedelta, timezone
from typing import Any
from passlib.context import CryptContext
from jose import jwt
from airsense.core.config import get_settings

settings = get_settings()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Claim holding the embedded guest user on stateless tokens.
USER_CLAIM = "user"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(subject: str, claims: dict[str, Any] | None = None) -> str:
    """Signed JWT for ``subject``.

    Account tokens carry only the account id in ``sub``; guest tokens add the
    user document under ``USER_CLAIM`` (see ``create_guest_token``).
    """
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expires_minutes)
    to_encode: dict[str, Any] = {**(claims or {}), "sub": str(subject), "exp": expire}
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_guest_token(user: dict[str, Any]) -> str:
    return create_access_token(subject=user["id"], claims={USER_CLAIM: user})


def decode_access_token(token: str) -> dict[str, Any]:
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
