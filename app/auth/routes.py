# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Browser-facing OAuth endpoints (mounted at /auth):
#   GET  /auth/login     -> redirect to the identity provider
#   GET  /auth/callback  -> exchange ?code= for a session, sync the profile
#   POST /auth/logout    -> revoke the session behind the bearer token
#
# API endpoint (mounted at /api/auth):
#   GET  /api/auth/me    -> user behind the bearer token, with profile
#
# Each request talks to Supabase Auth through its own short-lived client.
# The PKCE code verifier created at /auth/login travels to /auth/callback
# in an HttpOnly cookie, so concurrent logins never share a verifier.
# A failed profile sync is logged and never blocks the login.
# =============================================================================

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Cookie, Depends, Request
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPAuthorizationCredentials

from app.auth.dependencies import get_current_user, security_optional
from app.config import settings
from app.dependencies import AuthServiceDep, AuthStorageDep, ProfileServiceDep
from app.exceptions import NotAuthenticatedError, SignOutError
from core.models.profile import CurrentUserResponse, User
from lib.utils import get_field

logger = logging.getLogger(__name__)

router = APIRouter()
api_router = APIRouter()

AUTH_FAILED_QUERY = "?error=auth_failed"

CODE_VERIFIER_COOKIE = "postboard-code-verifier"
CODE_VERIFIER_MAX_AGE = 600
COOKIE_PATH = "/auth"


def _home(request: Request) -> str:
    return str(request.base_url)


def _finish(url: str) -> RedirectResponse:
    """Redirect and drop the verifier cookie; it is single use."""
    response = RedirectResponse(url)
    response.delete_cookie(CODE_VERIFIER_COOKIE, path=COOKIE_PATH)
    return response


@router.get("/login")
async def login(request: Request, auth: AuthServiceDep, storage: AuthStorageDep):
    """Send the browser to the identity provider's consent page."""
    result = auth.sign_in_with_provider()

    if not result.ok or not result.data:
        return RedirectResponse(_home(request) + AUTH_FAILED_QUERY)

    response = RedirectResponse(result.data)
    if storage.code_verifier:
        response.set_cookie(
            CODE_VERIFIER_COOKIE,
            storage.code_verifier,
            max_age=CODE_VERIFIER_MAX_AGE,
            path=COOKIE_PATH,
            httponly=True,
            samesite="lax",
            secure=settings.is_production,
        )
    return response


@router.get("/callback")
async def auth_callback(
    request: Request,
    auth: AuthServiceDep,
    profiles: ProfileServiceDep,
    code: str | None = None,
    code_verifier: Annotated[str | None, Cookie(alias=CODE_VERIFIER_COOKIE)] = None,
):
    """
    Finish the OAuth flow.

    Redirects home on success (or when no code was given) and to
    `/?error=auth_failed` when the exchange fails.
    """
    if code:
        result = auth.exchange_code_for_session(code, code_verifier=code_verifier)

        if not result.ok:
            return _finish(_home(request) + AUTH_FAILED_QUERY)

        sync = profiles.ensure_profile(get_field(result.data, "user"))
        if not sync.ok:
            logger.warning(f"Profile sync failed after login, continuing: {sync.error}")

    return _finish(_home(request))


@router.post("/logout")
async def logout(
    auth: AuthServiceDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
):
    """
    Revoke the session behind the bearer token.

    Raises:
        401: If no token is sent
    """
    if credentials is None:
        raise NotAuthenticatedError()

    result = auth.sign_out(jwt=credentials.credentials)

    if not result.ok:
        raise SignOutError(str(result.error))

    return {"signed_out": True}


@api_router.get("/me", response_model=CurrentUserResponse)
async def get_current_user_info(
    profiles: ProfileServiceDep,
    user: User = Depends(get_current_user),
) -> CurrentUserResponse:
    """
    Get the authenticated user and their stored profile.

    The profile is null when it was never synced.

    Raises:
        401: If not authenticated
    """
    try:
        profile = profiles.get_profile(user.id)
    except Exception as e:
        logger.warning(f"Could not fetch user profile: {e}")
        profile = None

    return CurrentUserResponse(user=user, profile=profile)
