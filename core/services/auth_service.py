# =============================================================================
# core/services/auth_service.py - Authentication Operations
# =============================================================================
# Thin wrapper over the Supabase auth module:
# - starts the OAuth flow and exchanges the returned code for a session
# - signs out and reads the cached session / user
# - lets callers observe session transitions through a subscription
#
# Every method returns a ServiceResult; auth failures are shown to the user,
# never raised through the UI or the callback route.
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any, Callable

from supabase import Client

from app.config import settings
from core.models.profile import User
from core.models.result import ServiceResult
from lib.utils import get_field

logger = logging.getLogger(__name__)

AuthListener = Callable[[User | None], None]


@dataclass
class AuthSubscription:
    """Handle returned by on_auth_state_change(); call unsubscribe() to stop."""
    _detach: Callable[[], None]

    def unsubscribe(self) -> None:
        self._detach()


class AuthService:
    """
    Service for identity operations.

    The session cache belongs to the Supabase client passed in, so each
    client instance represents one signed-in (or anonymous) user. The API
    builds a fresh client per request; the shared data client is never
    passed here.
    """

    def __init__(
        self,
        client: Client,
        provider: str | None = None,
        redirect_to: str | None = None,
    ):
        self.client = client
        self.provider = provider or settings.OAUTH_PROVIDER
        self.redirect_to = redirect_to or settings.auth_redirect_url

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    @staticmethod
    def transform_user(raw: Any) -> User | None:
        """
        Map a backend user to the application's User.

        Example:
            transform_user({"id": "u1", "email": "a@b.c",
                            "user_metadata": {"user_name": "octocat"}})
            -> User(id="u1", email="a@b.c", username="octocat", avatar_url=None)
        """
        if raw is None:
            return None

        metadata = get_field(raw, "user_metadata") or {}
        return User(
            id=str(get_field(raw, "id")),
            email=get_field(raw, "email") or None,
            username=metadata.get("user_name"),
            avatar_url=metadata.get("avatar_url"),
        )

    # -------------------------------------------------------------------------
    # OAuth flow
    # -------------------------------------------------------------------------

    def sign_in_with_provider(self, redirect_to: str | None = None) -> ServiceResult[str | None]:
        """
        Start the OAuth redirect flow.

        Args:
            redirect_to: Callback URL; defaults to SITE_URL/auth/callback

        Returns:
            ServiceResult with the provider URL the browser must visit
        """
        try:
            response = self.client.auth.sign_in_with_oauth({
                "provider": self.provider,
                "options": {"redirect_to": redirect_to or self.redirect_to},
            })
        except Exception as e:
            logger.error(f"OAuth sign-in with {self.provider} failed: {e}")
            return ServiceResult.failure(e, data=None)

        return ServiceResult.success(response.url)

    def exchange_code_for_session(
        self,
        code: str,
        code_verifier: str | None = None,
    ) -> ServiceResult[Any]:
        """
        Exchange the OAuth callback code for a session.

        Args:
            code: `code` query parameter of the callback
            code_verifier: PKCE verifier from the matching sign-in; when
                omitted the client's own storage is used

        Returns:
            ServiceResult with the new Session (its `user` is the backend user)
        """
        params = {"auth_code": code}
        if code_verifier:
            params["code_verifier"] = code_verifier

        try:
            response = self.client.auth.exchange_code_for_session(params)
        except Exception as e:
            logger.error(f"Error exchanging code for session: {e}")
            return ServiceResult.failure(e, data=None)

        session = get_field(response, "session")
        if session is None:
            error = RuntimeError("Code exchange returned no session")
            logger.error(f"Error exchanging code for session: {error}")
            return ServiceResult.failure(error, data=None)

        return ServiceResult.success(session)

    def sign_out(self, jwt: str | None = None) -> ServiceResult[None]:
        """
        End a session.

        With `jwt` the session behind that access token is revoked on the
        backend; otherwise the client's own session is dropped.
        """
        try:
            if jwt:
                self.client.auth.admin.sign_out(jwt)
            else:
                self.client.auth.sign_out()
        except Exception as e:
            logger.error(f"Sign out failed: {e}")
            return ServiceResult.failure(e, data=None)
        return ServiceResult.success(None)

    # -------------------------------------------------------------------------
    # Session state
    # -------------------------------------------------------------------------

    def get_current_user(self, jwt: str | None = None) -> ServiceResult[User | None]:
        """
        Read the signed-in user.

        Args:
            jwt: Access token to validate; defaults to the cached session

        Returns:
            ServiceResult with the User, or None when nobody is signed in
        """
        try:
            response = self.client.auth.get_user(jwt)
        except Exception as e:
            logger.warning(f"Could not read current user: {e}")
            return ServiceResult.failure(e, data=None)

        return ServiceResult.success(self.transform_user(get_field(response, "user")))

    def get_session(self) -> ServiceResult[Any]:
        """Read the cached session (None when signed out)."""
        try:
            return ServiceResult.success(self.client.auth.get_session())
        except Exception as e:
            logger.warning(f"Could not read session: {e}")
            return ServiceResult.failure(e, data=None)

    def on_auth_state_change(self, callback: AuthListener) -> AuthSubscription:
        """
        Call `callback` on every session transition.

        The callback receives the normalized User, or None once the session
        is gone (sign-out, expired refresh).
        """
        def listener(_event: Any, session: Any) -> None:
            user = get_field(session, "user")
            callback(self.transform_user(user) if user else None)

        subscription = self.client.auth.on_auth_state_change(listener)
        return AuthSubscription(_detach=subscription.unsubscribe)
