"""Tests for the Telegram bot webhook handling."""

import pytest
from fakes import telegram_update
from pymongo.errors import PyMongoError

from threads.core.modules.session.models import ClientInfo
from threads.errors import AccessDeniedError

SECRET = "test-webhook-secret"


class TestWebhookSecret:
    """Tests for webhook authentication."""

    @pytest.mark.parametrize("secret", [None, "", "wrong-secret"])
    async def test_bad_secret_rejected(self, app, database, gateway, secret):
        """Test that updates without the right secret are refused with no side effects."""
        with pytest.raises(AccessDeniedError):
            await app.handle_telegram_webhook(secret, telegram_update("/auth"))
        assert database.calls == 0
        assert gateway.sent == []

    async def test_bad_secret_checked_before_payload(self, app):
        """Test that a malformed body with a wrong secret is still refused."""
        with pytest.raises(AccessDeniedError):
            await app.handle_telegram_webhook("wrong-secret", None)


class TestUpdates:
    """Tests for update filtering."""

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            [],
            {"update_id": 1},
            {"update_id": 1, "message": {"chat": {"id": 291, "type": "private"}}},
            telegram_update("/auth", chat_id=-100, chat_type="group"),
            telegram_update("hello"),
        ],
    )
    async def test_ignored_updates(self, app, core, database, gateway, payload):
        """Test that irrelevant updates are acknowledged without doing anything."""
        assert await app.handle_telegram_webhook(SECRET, payload) is False
        await core.tasks.drain()
        assert database.is_empty
        assert gateway.sent == []

    @pytest.mark.parametrize("text", ["/start", "/help"])
    async def test_help(self, app, core, gateway, text):
        """Test that /start and /help reply with the command list."""
        assert await app.handle_telegram_webhook(SECRET, telegram_update(text)) is True
        await core.tasks.drain()
        assert len(gateway.sent) == 1
        assert "/auth" in gateway.sent[0].text


class TestAuthCommand:
    """Tests for /auth."""

    @pytest.mark.parametrize("text", ["/auth", "/start auth"])
    async def test_auth_issues_token(self, app, core, database, gateway, text):
        """Test that /auth creates the user and sends a login token with a login button."""
        assert await app.handle_telegram_webhook(SECRET, telegram_update(text)) is True
        await core.tasks.drain()

        user = await core.services.user.get_user("123")
        assert user.name == "Ada Lovelace"

        token = database.get_collection("auth_tokens").docs[0]["token"]
        assert len(gateway.sent) == 1
        message = gateway.sent[0]
        assert message.chat_id == 291
        assert token in message.text
        button = message.reply_markup.inline_keyboard[0][0]
        assert button.url == f"https://threads.test/login?token={token}"

    async def test_auth_keeps_existing_name(self, app, core):
        """Test that /auth does not rename an existing user."""
        await core.services.user.add_user("123", "Countess")
        await app.handle_telegram_webhook(SECRET, telegram_update("/auth"))
        await core.tasks.drain()
        assert (await core.services.user.get_user("123")).name == "Countess"

    async def test_repeated_auth_supersedes_token(self, app, core, database):
        """Test that a second /auth invalidates the first token."""
        await app.handle_telegram_webhook(SECRET, telegram_update("/auth"))
        first = database.get_collection("auth_tokens").docs[0]["token"]
        await app.handle_telegram_webhook(SECRET, telegram_update("/auth"))
        assert await core.services.token.get_valid_token(first) is None
        assert len(database.get_collection("auth_tokens").docs) == 1
        await core.tasks.drain()


class TestSyncAndQuit:
    """Tests for /sync and /quit."""

    async def test_sync_updates_name(self, app, core, gateway):
        """Test that /sync overwrites the stored name."""
        await core.services.user.add_user("123", "Ada")
        await app.handle_telegram_webhook(SECRET, telegram_update("/sync", last_name="Byron"))
        await core.tasks.drain()
        assert (await core.services.user.get_user("123")).name == "Ada Byron"
        assert "Ada Byron" in gateway.sent[0].text

    async def test_quit_destroys_sessions(self, app, core, gateway):
        """Test that /quit logs the user out everywhere."""
        await core.services.user.add_user("123", "Ada")
        await core.services.session.create_session("123", ClientInfo())
        await core.services.session.create_session("123", ClientInfo())

        await app.handle_telegram_webhook(SECRET, telegram_update("/quit"))
        await core.tasks.drain()
        assert await core.services.session.get_user_sessions("123") == []
        assert gateway.sent[0].text == "🚪 Logged out of 2 sessions."

    async def test_quit_failure_is_reported(self, app, core, gateway, monkeypatch):
        """Test that a store failure during /quit is answered with an error message."""

        async def fail(user_id):
            raise PyMongoError("connection lost")

        monkeypatch.setattr(core.services.session, "destroy_all_sessions", fail)
        assert await app.handle_telegram_webhook(SECRET, telegram_update("/quit")) is True
        await core.tasks.drain()
        assert gateway.sent[0].text.startswith("❌")
