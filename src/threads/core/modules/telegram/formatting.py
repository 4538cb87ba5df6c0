"""HTML helpers for Telegram messages.

The wrappers do not escape their argument. Escape user-controlled values with
`escape` before interpolating them.
"""


def escape(text: str) -> str:
    """Escape the characters Telegram's HTML parse mode treats as markup."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def bold(text: str) -> str:
    return f"<b>{text}</b>"


def code(text: str) -> str:
    return f"<code>{text}</code>"


def pre(text: str) -> str:
    return f"<pre>{text}</pre>"


def expandable_blockquote(text: str) -> str:
    """Collapsible quote block, shown folded by Telegram clients."""
    return f"<blockquote expandable>{text}</blockquote>"
