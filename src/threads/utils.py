import re
from datetime import UTC, datetime

SAFE_PATH_RE = re.compile(r"^/(?![/\\])[^\s]*$")


def is_safe_redirect_path(value: str) -> bool:
    """Only same-site absolute paths are allowed as post-login destinations."""
    return bool(SAFE_PATH_RE.fullmatch(value))


def now() -> datetime:
    return datetime.now(UTC)
