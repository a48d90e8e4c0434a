"""
Supabase access-token verification.

Supabase signs its access tokens with the project's JWT secret (HS256,
audience ``authenticated``). The user id is the ``sub`` claim.
"""

from typing import Annotated
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import jwt
from jwt import PyJWTError

from mindpal.core.config import settings

bearer_scheme = HTTPBearer()

SUPABASE_AUDIENCE = "authenticated"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_user_id(token: str) -> str:
    """
    Return the user id carried by a Supabase access token.

    Used by the bearer dependency below and by the chat WebSocket, which
    receives its token as a query parameter.

    Raises:
        HTTPException: 401 for an expired, forged or subject-less token;
            500 when no JWT secret is configured
    """
    if not settings.supabase_jwt_secret:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="JWT secret not configured",
        )

    try:
        claims = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=["HS256"],
            audience=SUPABASE_AUDIENCE,
        )
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except PyJWTError as e:
        raise _unauthorized(f"Invalid token: {str(e)}")

    subject = claims.get("sub")
    if not subject:
        raise _unauthorized("Invalid token: missing user ID")

    return subject


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)]
) -> str:
    """User id from the ``Authorization: Bearer`` header."""
    return decode_user_id(credentials.credentials)


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
