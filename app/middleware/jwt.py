"""
Bearer credential dependencies.
"""
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.schemas.auth import TokenData
from app.services.access_gate import access_gate
from app.utils.logger import get_logger

logger = get_logger("jwt_middleware")

# auto_error is off so a missing header gets this service's own 401 body
security = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    """
    Dependency extracting the raw bearer token.

    Raises:
        HTTPException: 401 when the Authorization header is missing or not Bearer
    """
    if credentials is None or not credentials.credentials:
        logger.debug("Request without bearer credential")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
            headers={"WWW-Authenticate": "Bearer"}
        )

    return credentials.credentials


def require_token_data(token: str, detail: str = "Unauthorized") -> TokenData:
    """
    Verify a bearer token or fail the request.

    Args:
        token: Raw bearer token
        detail: Error message for an invalid token

    Returns:
        TokenData for the authenticated user

    Raises:
        HTTPException: 401 when the token is invalid
    """
    token_data = access_gate.authenticate(token)
    if token_data is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"}
        )
    return token_data
