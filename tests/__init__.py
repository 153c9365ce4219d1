# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Postboard API and client:
# - test_models.py: Unit tests for Pydantic model validation
# - test_services.py: Post, comment, profile and storage services
# - test_auth_service.py: OAuth flow and session state
# - test_api.py: Integration tests for the HTTP endpoints
# - test_client.py: httpx API client and Feed/CommentThread view state
# - test_auth_state.py: Signed-in user state
#
# Run tests with: pytest
# =============================================================================
