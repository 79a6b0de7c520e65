"""
Bearer token verification.

Tokens are issued by the auth service; this module only verifies them
and turns the claims into an Identity.
"""
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from core.application.security import Identity
from core.settings import get_app_settings


logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def decode_identity(token: str) -> Identity:
    """
    Verify a bearer token and build the caller identity.

    Claims: sub (user id), email, role (defaults to customer).

    Raises:
        HTTPException: 401 when the token is invalid or has no subject
    """
    settings = get_app_settings().auth
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    return Identity(
        user_id=str(user_id),
        email=payload.get("email"),
        role=payload.get("role") or "customer",
    )


async def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Identity]:
    """Identity when a valid bearer token is present, None for guests.

    A token that fails verification is ignored and the caller is treated
    as a guest, so guest email checks still apply.
    """
    if credentials is None:
        return None
    try:
        return decode_identity(credentials.credentials)
    except HTTPException:
        logger.info("Ignoring unverifiable bearer token on optional-auth route")
        return None


async def require_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return decode_identity(credentials.credentials)


async def require_admin(identity: Identity = Depends(require_identity)) -> Identity:
    if not identity.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return identity
