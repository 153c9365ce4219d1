# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import AuthService, AuthSubscription
from .comment_service import CommentService
from .post_service import PostService
from .profile_service import ProfileService
from .storage_service import StorageService

__all__ = [
    "AuthService",
    "AuthSubscription",
    "CommentService",
    "PostService",
    "ProfileService",
    "StorageService",
]
