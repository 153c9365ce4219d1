# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# GitHub OAuth through Supabase Auth, plus bearer-token resolution.
#
# Usage:
#   from app.auth import get_current_user
#
#   @router.get("/protected")
#   async def protected(user: User = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import get_current_user

__all__ = [
    "get_current_user",
]
