"""
Request authentication.

A caller identifies itself with either an ``X-API-Key`` header or a
Supabase access token in ``Authorization: Bearer <token>``. Access tokens
are HS256 JWTs with audience "authenticated"; the ``sub`` claim is the
user id that scopes every stored record.

Credentials are read through ``Settings`` on each call rather than the
cached instance, so rotated keys take effect without a restart.
"""
import logging
from typing import Optional

import jwt
from fastapi import Header, HTTPException

from backend.settings import Settings

logger = logging.getLogger(__name__)

SUPABASE_JWT_ALGORITHM = "HS256"
SUPABASE_JWT_AUDIENCE = "authenticated"
# User id for a bare API key with no ":user_id" suffix
API_KEY_DEFAULT_USER = "admin"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail)


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> str:
    """
    Resolve the calling user id.

    The API key is checked first when both headers are present.

    Raises:
        HTTPException: 401 when neither header is usable
    """
    if x_api_key:
        return validate_api_key(x_api_key)
    if authorization:
        return validate_jwt(authorization)
    raise _unauthorized("Missing authentication. Provide Authorization header or X-API-Key.")


def validate_api_key(api_key: str) -> str:
    """
    Check ``api_key`` against the configured keys.

    ``"sk_live_x"`` authenticates as API_KEY_DEFAULT_USER and
    ``"sk_live_x:user_7"`` authenticates as ``user_7``.
    """
    configured = Settings().api_keys_list
    if not configured:
        logger.warning("API key presented but API_KEYS is empty")
        raise _unauthorized("API key authentication not configured")

    key, _, user_id = api_key.partition(":")
    if key not in configured:
        raise _unauthorized("Invalid API key")
    return user_id or API_KEY_DEFAULT_USER


def validate_jwt(authorization: str) -> str:
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token:
        raise _unauthorized("Invalid authorization header format")

    secret = Settings().supabase_jwt_secret
    if not secret:
        raise HTTPException(
            status_code=500,
            detail="JWT validation not configured (missing SUPABASE_JWT_SECRET)",
        )

    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[SUPABASE_JWT_ALGORITHM],
            audience=SUPABASE_JWT_AUDIENCE,
        )
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected access token: {e}")
        raise _unauthorized(f"Invalid token: {e}")

    user_id = claims.get("sub")
    if not user_id:
        raise _unauthorized("Token missing user ID")
    logger.debug(f"Access token accepted for user {user_id}")
    return user_id
