# =============================================================================
# client/auth_state.py - Signed-in User State
# =============================================================================
# Tracks who is signed in for an interactive client:
# - start(): read the current user, sync their profile, then follow
#   session transitions (sign-in, sign-out, token refresh)
# - sign_in() / sign_out(): drive the OAuth flow
# - close(): stop following; late results are ignored
#
# A failed profile sync is logged and otherwise ignored. The user is still
# signed in.
# =============================================================================

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from core.models.profile import User
from core.models.result import ServiceResult
from lib.utils import get_field

if TYPE_CHECKING:
    from core.services.auth_service import AuthService, AuthSubscription
    from core.services.profile_service import ProfileService

logger = logging.getLogger(__name__)


class AuthState:
    """
    Current user, loading flag and last error.

    Example:
        state = AuthState(AuthService(client), ProfileService(client))
        state.start()
        if state.is_authenticated:
            print(state.user.username)
    """

    def __init__(self, auth: AuthService, profiles: ProfileService | None = None):
        self._auth = auth
        self._profiles = profiles
        self._subscription: AuthSubscription | None = None
        self._cancelled = False
        self._listeners: list[Callable[[AuthState], None]] = []

        self.user: User | None = None
        self.loading = True
        self.error: Exception | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def on_change(self, listener: Callable[[AuthState], None]) -> Callable[[], None]:
        """Call `listener(state)` after every change; returns a remover."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _update(self, **changes: Any) -> None:
        if self._cancelled:
            return
        for name, value in changes.items():
            setattr(self, name, value)
        for listener in list(self._listeners):
            listener(self)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Load the current user and subscribe to session changes."""
        self.refresh()
        self._subscription = self._auth.on_auth_state_change(self._handle_auth_change)

    def close(self) -> None:
        self._cancelled = True
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def refresh(self) -> None:
        """Read the current user from the session cache."""
        self._update(loading=True, error=None)

        result = self._auth.get_current_user()
        if not result.ok:
            self._update(user=None, error=result.error, loading=False)
            return

        if result.data is not None:
            self._sync_profile()

        self._update(user=result.data, loading=False)

    def _sync_profile(self) -> None:
        if self._profiles is None:
            return

        session = self._auth.get_session()
        session_user = get_field(session.data, "user") if session.ok else None
        if session_user is None:
            return

        synced = self._profiles.ensure_profile(session_user)
        if not synced.ok:
            logger.warning(f"Failed to ensure profile: {synced.error}")

    def _handle_auth_change(self, user: User | None) -> None:
        self._update(user=user, loading=False)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def sign_in(self) -> ServiceResult[str | None]:
        """
        Start the OAuth flow.

        Returns the provider URL to open. `loading` stays true until the
        session change arrives.
        """
        self._update(loading=True)
        result = self._auth.sign_in_with_provider()
        if not result.ok:
            self._update(error=result.error, loading=False)
        return result

    def sign_out(self) -> ServiceResult[None]:
        self._update(loading=True)
        result = self._auth.sign_out()
        if not result.ok:
            self._update(error=result.error)
        self._update(loading=False)
        return result
