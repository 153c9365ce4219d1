# =============================================================================
# client/ - Postboard API Client
# =============================================================================
# Python counterpart of the web UI's data layer:
# - api.py: httpx clients for posts, comments and uploads
# - views.py: Feed and CommentThread view state
# - auth_state.py: signed-in user state following session changes
# - errors.py: FetchError, UploadError, LocalValidationError
#
# Nothing here raises on a failed request; results come back as
# ServiceResult(data, error).
# =============================================================================

from client.api import CommentsClient, ImageFile, PostsClient, UploadsClient
from client.auth_state import AuthState
from client.errors import FetchError, LocalValidationError, UploadError
from client.views import CommentThread, Feed

__all__ = [
    "AuthState",
    "CommentThread",
    "CommentsClient",
    "Feed",
    "FetchError",
    "ImageFile",
    "LocalValidationError",
    "PostsClient",
    "UploadError",
    "UploadsClient",
]
