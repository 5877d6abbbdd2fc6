import logging
import os
from typing import Optional

import jwt
from fastapi import Cookie, Header, HTTPException

logger = logging.getLogger(__name__)

JWT_ALGORITHMS = ["HS256"]


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token from an ``Authorization: Bearer <token>`` header, else None."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token or " " in token:
        return None
    return token


def verify_admin_token(token: Optional[str]) -> bool:
    """True only for a token signed with JWT_SECRET that has not expired.

    Every failure (no token, no secret configured, bad signature, expired,
    garbage) is a plain False.
    """
    if not token:
        return False
    secret = os.getenv("JWT_SECRET")
    if not secret:
        logger.error("JWT_SECRET not configured; denying admin request")
        return False
    try:
        jwt.decode(token, secret, algorithms=JWT_ALGORITHMS)
    except jwt.PyJWTError as e:
        logger.info("Admin token rejected (%s)", type(e).__name__)
        return False
    return True


def is_admin(authorization: Optional[str], cookie_token: Optional[str] = None) -> bool:
    # The cookie is only consulted when no Authorization header was sent.
    if authorization is not None:
        return verify_admin_token(extract_bearer_token(authorization))
    return verify_admin_token(cookie_token)


def admin_token_required(
    authorization: Optional[str] = Header(default=None),
    admin_token: Optional[str] = Cookie(default=None),
):
    if not is_admin(authorization, admin_token):
        raise HTTPException(
            status_code=401,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return True
