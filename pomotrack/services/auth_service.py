from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt

from pomotrack import config


def decode_access_token(token: str) -> dict:
    """
    Verify a bearer token issued by the identity provider.

    Raises:
        JWTError: signature, expiry or audience check failed
        ValueError: no verification secret configured
    """
    if not config.AUTH_JWT_SECRET:
        raise ValueError("AUTH_JWT_SECRET environment variable not set")

    options = {"verify_aud": config.AUTH_JWT_AUDIENCE is not None}
    return jwt.decode(
        token,
        config.AUTH_JWT_SECRET,
        algorithms=[config.AUTH_JWT_ALGORITHM],
        audience=config.AUTH_JWT_AUDIENCE,
        options=options,
    )


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Mint a token the way the identity provider would. Used by tests and dev tooling."""
    if not config.AUTH_JWT_SECRET:
        raise ValueError("AUTH_JWT_SECRET environment variable not set")
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=15))
    to_encode.update({"exp": expire})
    if config.AUTH_JWT_AUDIENCE:
        to_encode.setdefault("aud", config.AUTH_JWT_AUDIENCE)
    return jwt.encode(to_encode, config.AUTH_JWT_SECRET, algorithm=config.AUTH_JWT_ALGORITHM)
