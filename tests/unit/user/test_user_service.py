"""Tests for user storage."""

import pytest

from threads.errors import NotFoundError


class TestUserService:
    """Tests for adding, syncing and reading users."""

    async def test_add_user(self, core):
        """Test that a new user is created with the given name."""
        user = await core.services.user.add_user("123", "Ada Lovelace")
        assert user.id == "123"
        assert user.name == "Ada Lovelace"

    async def test_add_user_keeps_existing_name(self, core, database):
        """Test that adding an existing user does not rename it."""
        first = await core.services.user.add_user("123", "Ada")
        second = await core.services.user.add_user("123", "Someone Else")
        assert second.name == "Ada"
        assert second.created_at == first.created_at
        assert len(database.get_collection("users").docs) == 1

    async def test_sync_user_overwrites_name(self, core):
        """Test that syncing replaces the stored name."""
        created = await core.services.user.add_user("123", "Ada")
        synced = await core.services.user.sync_user("123", "Ada Lovelace")
        assert synced.name == "Ada Lovelace"
        assert synced.created_at == created.created_at

    async def test_sync_user_creates_missing_user(self, core):
        """Test that syncing an unknown user creates it."""
        user = await core.services.user.sync_user("ff", "Grace")
        assert user.id == "ff"
        assert user.name == "Grace"

    async def test_get_missing_user(self, core):
        """Test lookups of unknown users."""
        assert await core.services.user.find_user("404") is None
        with pytest.raises(NotFoundError):
            await core.services.user.get_user("404")
