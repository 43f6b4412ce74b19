"""
JWT utilities for credentials issued by the external auth provider.

The provider signs access tokens with a shared secret; the user ID is in
`sub`, the email in `email`, and the audience is `authenticated`.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID
from jose import JWTError, jwt
from app.config import settings
from app.schemas.auth import TokenData


def create_access_token(
    user_id: UUID,
    email: Optional[str] = None,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create an access token in the auth provider's format.

    Used by tests and local tooling; production tokens come from the provider.

    Args:
        user_id: User's UUID
        email: User's email address
        expires_delta: Lifetime override (defaults to ACCESS_TOKEN_EXPIRE_DAYS)

    Returns:
        Encoded JWT token string
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    )

    to_encode = {
        "sub": str(user_id),
        "exp": expire,
    }
    if email:
        to_encode["email"] = email
    if settings.JWT_AUDIENCE:
        to_encode["aud"] = settings.JWT_AUDIENCE

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )


def verify_token(token: str) -> TokenData:
    """
    Verify and decode an access token.

    Args:
        token: JWT token string to verify

    Returns:
        TokenData with the decoded user identity

    Raises:
        JWTError: If the token is invalid, expired, or lacks a usable subject
    """
    options = {"verify_aud": settings.JWT_AUDIENCE is not None}

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            options=options
        )
    except JWTError as e:
        raise JWTError(f"Token verification failed: {str(e)}")

    user_id_str: Optional[str] = payload.get("sub")
    if not user_id_str:
        raise JWTError("Token verification failed: missing subject")

    try:
        user_id = UUID(user_id_str)
    except (TypeError, ValueError):
        raise JWTError("Token verification failed: subject is not a user ID")

    return TokenData(user_id=user_id, email=payload.get("email"))
