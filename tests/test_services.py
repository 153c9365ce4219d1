# =============================================================================
# tests/test_services.py - Domain Service Tests
# =============================================================================
# Tests for PostService, CommentService, ProfileService and StorageService
# against the in-memory FakeSupabase from conftest.py.
#
# Rejected input must never reach the backend, so most validation tests
# also assert that no write was recorded.
# =============================================================================

from types import SimpleNamespace

import pytest

from app.exceptions import (
    ImageTooLargeError,
    InvalidImageError,
    MissingFieldError,
    PostContentRequiredError,
    StorageUploadError,
)
from core.models.media import MAX_IMAGE_SIZE_BYTES, ImageKind
from core.services import CommentService, PostService, ProfileService, StorageService
from core.services.profile_service import profile_row_for
from lib.supabase_client import SupabaseClientError


# =============================================================================
# PostService
# =============================================================================

class TestPostService:
    """Tests for listing and creating posts."""

    def test_create_text_post(self, fake_supabase):
        post = PostService(fake_supabase).create_post(user_id="u1", content="hello")

        assert post.content == "hello"
        assert post.image_url is None
        assert post.author_id == "u1"
        assert post.profiles.username == "octocat"

    def test_create_image_only_post(self, fake_supabase):
        post = PostService(fake_supabase).create_post(
            user_id="u1", content="   ", image_url="https://img/cat.png"
        )

        assert post.content is None
        assert post.image_url == "https://img/cat.png"

    def test_blank_post_rejected_without_backend_call(self, fake_supabase):
        with pytest.raises(PostContentRequiredError) as exc_info:
            PostService(fake_supabase).create_post(user_id="u1", content="  ", image_url="")

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Either content or imageUrl is required"
        assert fake_supabase.calls == []

    def test_missing_user_rejected(self, fake_supabase):
        with pytest.raises(MissingFieldError) as exc_info:
            PostService(fake_supabase).create_post(user_id=None, content="hello")

        assert exc_info.value.message == "userId is required"
        assert fake_supabase.calls == []

    def test_list_newest_first_with_author(self, fake_supabase):
        service = PostService(fake_supabase)
        service.create_post(user_id="u1", content="first")
        service.create_post(user_id="u1", content="second")

        posts = service.list_posts()

        assert [p.content for p in posts] == ["second", "first"]
        assert all(p.profiles.username == "octocat" for p in posts)

    def test_every_stored_post_has_a_body(self, fake_supabase):
        service = PostService(fake_supabase)
        service.create_post(user_id="u1", content="text")
        service.create_post(user_id="u1", image_url="https://img/1.png")
        with pytest.raises(PostContentRequiredError):
            service.create_post(user_id="u1")

        assert all(p.has_body for p in service.list_posts())

    def test_list_failure_raises_client_error(self, fake_supabase):
        fake_supabase.fail("posts")

        with pytest.raises(SupabaseClientError) as exc_info:
            PostService(fake_supabase).list_posts()

        assert exc_info.value.code == "FETCH_POSTS_FAILED"

    def test_insert_failure_raises_client_error(self, fake_supabase):
        fake_supabase.fail("posts")

        with pytest.raises(SupabaseClientError) as exc_info:
            PostService(fake_supabase).create_post(user_id="u1", content="hello")

        assert exc_info.value.code == "INSERT_POST_FAILED"


# =============================================================================
# CommentService
# =============================================================================

class TestCommentService:
    """Tests for listing and creating comments."""

    def test_create_comment(self, fake_supabase):
        comment = CommentService(fake_supabase).create_comment(
            post_id="p1", user_id="u1", content="nice!"
        )

        assert comment.content == "nice!"
        assert comment.post_id == "p1"
        assert comment.image_url is None
        assert comment.author.id == "u1"
        assert comment.author.username == "octocat"

    def test_comment_with_image(self, fake_supabase):
        comment = CommentService(fake_supabase).create_comment(
            post_id="p1", user_id="u1", content="look", image_url="https://img/c.png"
        )
        assert comment.image_url == "https://img/c.png"

    def test_blank_comment_image_stored_as_null(self, fake_supabase):
        comment = CommentService(fake_supabase).create_comment(
            post_id="p1", user_id="u1", content="look", image_url="   "
        )

        assert comment.image_url is None
        assert fake_supabase.tables["comments"][0]["image_url"] is None

    def test_image_only_comment_rejected(self, fake_supabase):
        with pytest.raises(MissingFieldError) as exc_info:
            CommentService(fake_supabase).create_comment(
                post_id="p1", user_id="u1", content="  ", image_url="https://img/c.png"
            )

        assert exc_info.value.message == "content and userId are required"
        assert fake_supabase.writes("comments") == []

    def test_missing_user_rejected(self, fake_supabase):
        with pytest.raises(MissingFieldError):
            CommentService(fake_supabase).create_comment(post_id="p1", user_id="", content="hi")

    def test_blank_post_id_rejected(self, fake_supabase):
        with pytest.raises(MissingFieldError) as exc_info:
            CommentService(fake_supabase).list_comments(" ")

        assert exc_info.value.message == "postId is required"

    def test_list_oldest_first_for_one_post(self, fake_supabase):
        service = CommentService(fake_supabase)
        service.create_comment(post_id="p1", user_id="u1", content="first")
        service.create_comment(post_id="p2", user_id="u1", content="elsewhere")
        service.create_comment(post_id="p1", user_id="u1", content="second")

        comments = service.list_comments("p1")

        assert [c.content for c in comments] == ["first", "second"]

    def test_list_failure_raises_client_error(self, fake_supabase):
        fake_supabase.fail("comments")

        with pytest.raises(SupabaseClientError) as exc_info:
            CommentService(fake_supabase).list_comments("p1")

        assert exc_info.value.details == {"post_id": "p1"}


# =============================================================================
# ProfileService
# =============================================================================

class TestProfileService:
    """Tests for profile sync."""

    def test_row_uses_provider_metadata(self, github_user):
        row = profile_row_for(github_user)

        assert row["id"] == "u1"
        assert row["username"] == "octocat"
        assert row["avatar_url"] == "https://avatars.example.com/octocat.png"

    def test_row_falls_back_to_email_local_part(self):
        user = {"id": "u2", "email": "mona@example.com", "user_metadata": {}}
        row = profile_row_for(user)

        assert row["username"] == "mona"
        assert row["avatar_url"] is None

    def test_row_falls_back_to_anonymous(self):
        row = profile_row_for({"id": "u3", "email": None, "user_metadata": None})
        assert row["username"] == "anonymous"

    def test_ensure_profile_is_idempotent(self, fake_supabase, github_user):
        service = ProfileService(fake_supabase)

        first = service.ensure_profile(github_user)
        renamed = SimpleNamespace(
            id="u1",
            email="octocat@example.com",
            user_metadata={"user_name": "octocat-renamed", "avatar_url": None},
        )
        second = service.ensure_profile(renamed)

        assert first.ok and second.ok
        rows = [p for p in fake_supabase.tables["profiles"] if p["id"] == "u1"]
        assert len(rows) == 1
        assert rows[0]["username"] == "octocat-renamed"
        assert second.data.username == "octocat-renamed"

    def test_ensure_profile_failure_is_returned_not_raised(self, fake_supabase, github_user):
        fake_supabase.fail("profiles")

        result = ProfileService(fake_supabase).ensure_profile(github_user)

        assert not result.ok
        assert result.data is None
        assert isinstance(result.error, SupabaseClientError)
        assert result.error.code == "PROFILE_SYNC_FAILED"

    def test_get_profile(self, fake_supabase):
        profile = ProfileService(fake_supabase).get_profile("u1")
        assert profile.username == "octocat"

    def test_get_missing_profile_returns_none(self, fake_supabase):
        assert ProfileService(fake_supabase).get_profile("nobody") is None


# =============================================================================
# StorageService
# =============================================================================

class TestStorageService:
    """Tests for image uploads."""

    def test_build_path(self):
        assert StorageService.build_path("u1", "cat.png", 1700000000000) == "u1/u1-1700000000000.png"

    def test_upload_post_image(self, fake_supabase):
        url = StorageService(fake_supabase).upload(
            content=b"\x89PNG fake",
            filename="cat.png",
            content_type="image/png",
            user_id="u1",
            kind=ImageKind.POST,
        )

        upload = fake_supabase.storage.uploads[0]
        assert upload["bucket"] == "post-images"
        assert upload["path"].startswith("u1/u1-")
        assert upload["path"].endswith(".png")
        assert upload["file_options"]["upsert"] == "false"
        assert url.endswith(f"/post-images/{upload['path']}")

    def test_comment_images_use_their_own_bucket(self, fake_supabase):
        StorageService(fake_supabase).upload(
            content=b"GIF89a", filename="a.gif", content_type="image/gif",
            user_id="u1", kind="comment",
        )
        assert fake_supabase.storage.uploads[0]["bucket"] == "comment-images"

    def test_invalid_type_rejected_before_upload(self, fake_supabase):
        with pytest.raises(InvalidImageError):
            StorageService(fake_supabase).upload(
                content=b"%PDF", filename="doc.pdf", content_type="application/pdf",
                user_id="u1", kind=ImageKind.POST,
            )
        assert fake_supabase.storage.uploads == []

    def test_too_large_rejected_before_upload(self, fake_supabase):
        with pytest.raises(ImageTooLargeError) as exc_info:
            StorageService(fake_supabase).upload(
                content=b"0" * (MAX_IMAGE_SIZE_BYTES + 1), filename="big.png",
                content_type="image/png", user_id="u1", kind=ImageKind.POST,
            )

        assert exc_info.value.status_code == 413
        assert fake_supabase.storage.uploads == []

    def test_backend_failure_raises_upload_error(self, fake_supabase):
        fake_supabase.storage.failure = Exception("The resource already exists")

        with pytest.raises(StorageUploadError) as exc_info:
            StorageService(fake_supabase).upload(
                content=b"\x89PNG", filename="cat.png", content_type="image/png",
                user_id="u1", kind=ImageKind.POST,
            )

        assert exc_info.value.details["bucket"] == "post-images"
