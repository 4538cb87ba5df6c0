"""Bot message texts."""

from threads.core.modules.session.models import ClientInfo
from threads.core.modules.telegram.formatting import bold, code, escape, expandable_blockquote, pre


def render_help_message() -> str:
    return (
        f"👋 Welcome to {bold('Threads')}!\n\n"
        "Available commands:\n"
        "/auth - 🔐 Get your login token\n"
        "/sync - 🔄 Sync your profile with Threads\n"
        "/quit - 🚪 Log out of all sessions\n"
        "/help - 📄 Show this message\n\n"
        "Start posting, replying, and connecting — all through Threads."
    )


def render_token_message(token: str, ttl_minutes: int) -> str:
    return (
        "🔑 Your one-time login token:\n\n"
        f"{code(token)}\n\n"
        "Paste it in the login form, or simply tap the button below.\n\n"
        f"⚠️ Token expires in {ttl_minutes} minutes. Do {bold('not')} share it with anyone."
    )


def render_sync_message(name: str) -> str:
    return f"✅ Your profile info has been synced with Threads.\n\nName: {bold(escape(name))}"


def render_quit_message(count: int) -> str:
    if count == 0:
        return "ℹ️ You have no active sessions."
    noun = "session" if count == 1 else "sessions"
    return f"🚪 Logged out of {count} {noun}."


def render_quit_failed_message() -> str:
    return "❌ Failed to log out of your sessions. Please try again later."


def render_login_message(client: ClientInfo, token: str) -> str:
    """Login alert with device, IP and location, sent to the account owner."""
    details = (
        f"{escape(client.device)}\n"
        f"IP: {escape(client.ip or 'Unknown')}\n"
        f"Location: {escape(client.location or 'Unknown 🌎')}\n"
        f"Token: {escape(token)}"
    )
    return f"✅ You've successfully logged in to {bold('Threads')}!\n\n" + expandable_blockquote(pre(details))
