"""
API routes for credential validation.
"""
from fastapi import APIRouter, Depends

from app.middleware.jwt import get_bearer_token, require_token_data
from app.schemas.auth import ValidateTokenResponse, ValidatedUser
from app.utils.logger import get_logger

logger = get_logger("auth_routes")

router = APIRouter()


@router.post(
    "/validate",
    response_model=ValidateTokenResponse,
    summary="Validate access token",
    description="Check a bearer token issued by the auth provider and return the user it belongs to"
)
async def validate_token(token: str = Depends(get_bearer_token)) -> ValidateTokenResponse:
    """
    Validate the caller's access token.

    Raises:
        HTTPException: 401 when the token is invalid
    """
    token_data = require_token_data(token, detail="Invalid token")

    logger.debug(f"Token validated", user_id=str(token_data.user_id))

    return ValidateTokenResponse(
        valid=True,
        user=ValidatedUser(id=token_data.user_id, email=token_data.email)
    )
