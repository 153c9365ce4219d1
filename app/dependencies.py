# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for the backend clients and the services.
#
# Table and storage services share the process-wide data client. AuthService
# gets a fresh client per request, built around an AuthFlowStorage that the
# auth routes can also reach (FastAPI resolves it once per request).
#
# Tests swap the clients by overriding get_supabase_client and
# get_auth_client.
# =============================================================================

from typing import Annotated

from fastapi import Depends
from supabase import Client

from core.services import (
    AuthService,
    CommentService,
    PostService,
    ProfileService,
    StorageService,
)
from lib.supabase_client import AuthFlowStorage, SupabaseClient


def get_supabase_client() -> Client:
    """
    Get the Supabase data client.

    Returns the process-wide client; it never carries a user session.
    """
    return SupabaseClient.get_client()


def get_auth_storage() -> AuthFlowStorage:
    return AuthFlowStorage()


SupabaseDep = Annotated[Client, Depends(get_supabase_client)]
AuthStorageDep = Annotated[AuthFlowStorage, Depends(get_auth_storage)]


def get_auth_client(storage: AuthStorageDep) -> Client:
    """A client that lives for one auth request only."""
    return SupabaseClient.create_auth_client(storage)


AuthClientDep = Annotated[Client, Depends(get_auth_client)]


def get_post_service(client: SupabaseDep) -> PostService:
    return PostService(client)


def get_comment_service(client: SupabaseDep) -> CommentService:
    return CommentService(client)


def get_profile_service(client: SupabaseDep) -> ProfileService:
    return ProfileService(client)


def get_storage_service(client: SupabaseDep) -> StorageService:
    return StorageService(client)


def get_auth_service(client: AuthClientDep) -> AuthService:
    return AuthService(client)


# Type aliases for route signatures
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
StorageServiceDep = Annotated[StorageService, Depends(get_storage_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
