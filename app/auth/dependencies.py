# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Resolves the caller from a Supabase access token. The token is validated
# by the backend's auth module (GET /auth/v1/user), so no signing secret
# is needed here.
#
# Usage:
#   from app.auth import get_current_user
#
#   @router.get("/protected")
#   async def protected(user: User = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.dependencies import AuthServiceDep
from app.exceptions import NotAuthenticatedError
from core.models.profile import User

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; missing headers are answered by us, not FastAPI
security_optional = HTTPBearer(auto_error=False)


async def get_current_user(
    auth: AuthServiceDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
) -> User:
    """
    Extract and validate the user behind a bearer token.

    Raises:
        NotAuthenticatedError: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise NotAuthenticatedError()

    result = auth.get_current_user(jwt=credentials.credentials)

    if not result.ok:
        logger.warning(f"Token validation failed: {result.error}")
        raise NotAuthenticatedError("Invalid or expired token")

    if result.data is None:
        raise NotAuthenticatedError("Invalid token: no user")

    logger.debug(f"Authenticated user: {result.data.id}")
    return result.data

