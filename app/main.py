# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Postboard API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.auth import routes as auth_routes
from app.config import settings
from app.exceptions import (
    PostboardException,
    postboard_exception_handler,
    supabase_exception_handler,
    validation_exception_handler,
)
from app.routers import comments, health, posts, uploads
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown; the Supabase client is created lazily."""
    logger.info(f"Starting Postboard API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down Postboard API")


app = FastAPI(
    title="Postboard API",
    description="""
## Posts, comments and images over Supabase

Sign in with GitHub, share a post with text and/or an image, and comment
on other posts.

### Quick Start

```bash
# 1. Upload an image (optional)
curl -X POST http://localhost:8000/api/uploads/post \\
  -F "file=@cat.png;type=image/png" -F "user_id=<your user id>"

# 2. Create a post
curl -X POST http://localhost:8000/api/posts \\
  -H "Content-Type: application/json" \\
  -d '{"content": "hello", "userId": "<your user id>"}'

# 3. Comment on it
curl -X POST http://localhost:8000/api/posts/{post_id}/comments \\
  -H "Content-Type: application/json" \\
  -d '{"content": "nice!", "userId": "<your user id>"}'
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "GitHub OAuth login and the current user"},
        {"name": "Posts", "description": "List and create posts"},
        {"name": "Comments", "description": "List and create comments on a post"},
        {"name": "Uploads", "description": "Image uploads for posts and comments"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(PostboardException)
async def handle_postboard_exception(request: Request, exc: PostboardException):
    """Handle validation, auth and upload errors."""
    return await postboard_exception_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_supabase_exception(request: Request, exc: SupabaseClientError):
    """Handle backend failures."""
    return await supabase_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Unexpected error",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# OAuth browser flow
app.include_router(
    auth_routes.router,
    prefix="/auth",
    tags=["Auth"]
)

# Current user
app.include_router(
    auth_routes.api_router,
    prefix="/api/auth",
    tags=["Auth"]
)

# Posts
app.include_router(
    posts.router,
    prefix="/api/posts",
    tags=["Posts"]
)

# Comments (nested under posts)
app.include_router(
    comments.router,
    prefix="/api/posts",
    tags=["Comments"]
)

# Image uploads
app.include_router(
    uploads.router,
    prefix="/api/uploads",
    tags=["Uploads"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)


@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.

    Also the landing page of the OAuth flow (`/?error=auth_failed` on failure).
    """
    return {
        "name": "Postboard API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
    }
