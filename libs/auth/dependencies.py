from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError

from libs.auth.models import AuthUser
from libs.common.config import get_settings
from libs.common.logging import get_logger

logger = get_logger(__name__)
security = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> AuthUser:
    """
    Decode a Supabase access token and build the caller identity.

    Raises JWTError or ValidationError when the token is not acceptable.
    """
    settings = get_settings()
    payload = jwt.decode(
        token,
        settings.SUPABASE_JWT_SECRET,
        algorithms=["HS256"],
        audience=settings.SUPABASE_JWT_AUDIENCE,
    )
    return AuthUser(**payload)


async def get_current_user(
    request: Request,
    token: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> AuthUser:
    """
    Validate the bearer token and return the authenticated user.
    """
    if token is None or not token.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No authorization header provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user = decode_access_token(token.credentials)
    except (JWTError, ValidationError) as e:
        logger.info(
            "Rejected bearer token",
            extra={"extra_fields": {"error": str(e)}},
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Used by the rate limiter key function
    request.state.user = user
    return user
