"""Random token generation and login token format checks."""

import re
import secrets

from threads.errors import ValidationError

AUTH_TOKEN_LENGTH = 45
USER_ID_SUFFIX_LENGTH = 13

HEX_RE = re.compile(r"^[0-9a-f]+$")


def generate_token(byte_length: int = 16) -> str:
    """Return `byte_length` bytes from the OS CSPRNG as lowercase hex (two chars per byte)."""
    return secrets.token_hex(byte_length)


def build_auth_token(user_id: str) -> str:
    """32 random hex chars followed by the user id zero-padded to 13 chars.

    The suffix only keeps tokens unique across users; it is never trusted on redemption.
    """
    return generate_token(16) + user_id.rjust(USER_ID_SUFFIX_LENGTH, "0")


def validate_token_format(value: str | None) -> str:
    """Check a submitted login token before any store access.

    Raises:
        ValidationError: with a message safe to show to the user
    """
    if not value:
        raise ValidationError("Token is required.")
    if not HEX_RE.fullmatch(value):
        raise ValidationError("Token must only contain lowercase letters (a-f) and numbers.")
    if len(value) != AUTH_TOKEN_LENGTH:
        raise ValidationError(f"Token must be exactly {AUTH_TOKEN_LENGTH} characters long.")
    return value


def user_id_from_chat_id(chat_id: int) -> str:
    return format(chat_id, "x")


def chat_id_from_user_id(user_id: str) -> int:
    return int(user_id, 16)
