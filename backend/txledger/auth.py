"""
Transaction Ledger Backend — Session Cookie Authentication
===========================================================

What:  FastAPI dependency that admits a request only if it carries a valid
       session cookie, and the helper that issues such cookies.
How:   The cookie (settings.auth_cookie_name, "token" by default) holds an
       HS256 JWT signed with settings.jwt_secret_key. The `id` claim names
       the caller; `exp` bounds its lifetime.
Who:   Attached to the transaction routers via `dependencies=[...]`.

Failure modes (all → 401 "Please login to continue"):
    - cookie absent
    - signature, algorithm or expiry check fails
    - token has no `id` claim
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Request

from txledger.config import settings
from txledger.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedCaller:
    user_id: str
    claims: Dict[str, Any]


def create_access_token(user_id: str, expires_minutes: Optional[int] = None) -> str:
    """Issue a signed session token for `user_id`."""
    minutes = expires_minutes if expires_minutes is not None else settings.jwt_expires_minutes
    payload = {
        "id": user_id,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> AuthenticatedCaller:
    try:
        claims = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
    except jwt.PyJWTError as exc:
        logger.info("Rejected session token: %s", exc)
        raise AuthenticationError(context={"reason": type(exc).__name__}) from exc

    user_id = claims.get("id")
    if not user_id:
        raise AuthenticationError(context={"reason": "missing id claim"})
    return AuthenticatedCaller(user_id=str(user_id), claims=claims)


async def require_authenticated(request: Request) -> AuthenticatedCaller:
    """Dependency: verify the session cookie and expose the caller on request.state."""
    token = request.cookies.get(settings.auth_cookie_name)
    if not token:
        raise AuthenticationError(context={"reason": "missing cookie"})
    caller = decode_access_token(token)
    request.state.caller = caller
    return caller


async def require_authenticated_for_types(request: Request) -> Optional[AuthenticatedCaller]:
    """Same gate for the transaction-type routes, unless disabled in settings."""
    if not settings.require_auth_for_transaction_types:
        return None
    return await require_authenticated(request)
