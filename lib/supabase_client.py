# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module owns the connections to the hosted backend:
# - one shared data client for tables (posts, comments, profiles) through
#   PostgREST and for storage (post and comment image buckets)
# - a fresh auth client per OAuth/token request, so a sign-in never changes
#   the credentials other requests run with
#
# Services do not create clients themselves. The FastAPI dependencies in
# app/dependencies.py hand a client to each service explicitly.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   client = SupabaseClient.get_client()
#   auth_client = SupabaseClient.create_auth_client()
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import Client, ClientOptions, create_client

from app.config import settings

logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Raised by the domain services whenever the backend rejects a query,
    an insert or an upload, or the transport fails.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class AuthFlowStorage:
    """
    In-memory storage handed to a per-request auth client.

    The auth module keeps the PKCE code verifier here between building the
    provider URL and exchanging the code. The login route reads it back to
    put it in a cookie; the callback seeds it from that cookie.
    """

    VERIFIER_SUFFIX = "-code-verifier"

    def __init__(self, code_verifier: str | None = None):
        self._items: dict[str, str] = {}
        self._seeded_verifier = code_verifier

    def get_item(self, key: str) -> str | None:
        if key in self._items:
            return self._items[key]
        if key.endswith(self.VERIFIER_SUFFIX):
            return self._seeded_verifier
        return None

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
        if key.endswith(self.VERIFIER_SUFFIX):
            self._seeded_verifier = None

    @property
    def code_verifier(self) -> str | None:
        """Verifier generated by the last sign-in on this storage."""
        for key, value in self._items.items():
            if key.endswith(self.VERIFIER_SUFFIX):
                return value
        return self._seeded_verifier


class SupabaseClient:
    """
    Holder for the Supabase clients.

    get_client() returns the process-wide data client used for tables and
    storage. It never signs anyone in, so its requests always carry the
    configured API key.

    create_auth_client() builds a fresh client for a single OAuth or token
    request. Whatever session that request produces dies with the client.
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the shared data client.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            cls._instance = cls._create(
                settings.supabase_key,
                ClientOptions(auto_refresh_token=False, persist_session=False),
            )
            logger.info("Supabase client initialized successfully")
        return cls._instance

    @classmethod
    def create_auth_client(cls, storage: AuthFlowStorage | None = None) -> Client:
        """
        Build a short-lived client for one auth request.

        Uses the anon key and the PKCE flow. Sessions are never written to
        disk or refreshed in the background.

        Args:
            storage: Where the PKCE code verifier is kept for this request

        Raises:
            SupabaseClientError: If client creation fails
        """
        return cls._create(
            settings.SUPABASE_ANON_KEY,
            ClientOptions(
                auto_refresh_token=False,
                persist_session=False,
                flow_type="pkce",
                storage=storage or AuthFlowStorage(),
            ),
        )

    @staticmethod
    def _create(key: str, options: ClientOptions) -> Client:
        try:
            return create_client(settings.SUPABASE_URL, key, options=options)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
            )

    @classmethod
    def reset(cls) -> None:
        """Forget the cached data client; the next get_client() builds a new one."""
        cls._instance = None
