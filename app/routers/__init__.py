# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - posts.py: List and create posts
# - comments.py: List and create comments on a post
# - uploads.py: Image uploads for posts and comments
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import comments
from . import health
from . import posts
from . import uploads

__all__ = [
    "comments",
    "health",
    "posts",
    "uploads",
]
