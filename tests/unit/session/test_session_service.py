"""Tests for anonymous session identity."""

from datetime import UTC, datetime, timedelta

import pytest

from coffee_tracker.core.modules.session.models import SESSION_COOKIE_NAME


class TestIsValid:
    """Tests for token format validation."""

    @pytest.fixture(autouse=True)
    def setup(self, services):
        self.session = services.session

    def test_lowercase_hex_accepted(self):
        assert self.session.is_valid("abcfabcfabcfabcfabcfabcfabcfabcf")

    def test_uppercase_hex_accepted(self):
        assert self.session.is_valid("ABCDEF0123456789ABCDEF0123456789")

    def test_empty_and_none_rejected(self):
        assert not self.session.is_valid("")
        assert not self.session.is_valid(None)

    def test_wrong_length_rejected(self):
        """Test that tokens must be exactly 32 characters."""
        assert not self.session.is_valid("a" * 31)
        assert not self.session.is_valid("a" * 33)

    def test_non_hex_characters_rejected(self):
        """Test that 32-character values outside the hex charset are rejected."""
        assert not self.session.is_valid("g" * 32)
        assert not self.session.is_valid("abcd-abcd-abcd-abcd-abcd-abcd-ab")
        assert not self.session.is_valid("abcfabcfabcfabcfabcfabcfabcfabc ")


class TestGenerateToken:
    """Tests for token minting."""

    def test_token_is_32_lowercase_hex(self, services):
        token = services.session.generate_token()
        assert len(token) == 32
        assert token == token.lower()
        assert services.session.is_valid(token)

    def test_tokens_are_unique(self, services):
        tokens = {services.session.generate_token() for _ in range(100)}
        assert len(tokens) == 100


class TestResolve:
    """Tests for resolving the session cookie."""

    def test_valid_cookie_reused_without_new_cookie(self, services):
        """Test that a valid incoming token is returned verbatim and no cookie is issued."""
        resolution = services.session.resolve("abcfabcfabcfabcfabcfabcfabcfabcf", is_https=False)
        assert resolution.token == "abcfabcfabcfabcfabcfabcfabcfabcf"
        assert resolution.cookie is None
        assert not resolution.is_new

    def test_missing_cookie_mints_token(self, services):
        resolution = services.session.resolve(None, is_https=False)
        assert services.session.is_valid(resolution.token)
        assert resolution.is_new
        assert resolution.cookie.value == resolution.token

    def test_invalid_cookie_replaced(self, services):
        """Test that a malformed token is silently replaced by a fresh one."""
        resolution = services.session.resolve("not-a-session", is_https=False)
        assert resolution.token != "not-a-session"
        assert services.session.is_valid(resolution.token)
        assert resolution.is_new

    def test_cookie_attributes(self, services):
        """Test the cookie directive for a newly minted token."""
        before = datetime.now(UTC)
        cookie = services.session.resolve(None, is_https=False).cookie
        assert cookie.key == SESSION_COOKIE_NAME
        assert cookie.httponly is True
        assert cookie.samesite == "lax"
        assert cookie.secure is False
        assert cookie.max_age == 24 * 60 * 60
        assert before + timedelta(hours=24) <= cookie.expires <= datetime.now(UTC) + timedelta(hours=24)

    def test_secure_mirrors_https(self, services):
        cookie = services.session.resolve(None, is_https=True).cookie
        assert cookie.secure is True

    def test_resolution_does_not_touch_storage(self, services, entries_collection):
        """Test that resolving sessions never reads or writes the store."""
        services.session.resolve(None, is_https=False)
        services.session.resolve("abcfabcfabcfabcfabcfabcfabcfabcf", is_https=False)
        assert entries_collection.documents == []
