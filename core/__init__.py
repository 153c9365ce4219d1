# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for posts, comments, profiles and uploads
# - services/: Post, Comment, Profile, Storage and Auth services that take a
#   Supabase client and enforce the data rules before calling it
#
# Code in this package should NOT import from FastAPI.
# This keeps the logic testable and reusable.
# =============================================================================
