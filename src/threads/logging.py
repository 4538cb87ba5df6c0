import logging

import structlog
from structlog.typing import EventDict, WrappedLogger

# Event keys that may carry login tokens or session secrets
SECRET_KEYS = frozenset({"token", "session_token", "bot_token", "bot_secret"})


def drop_secrets(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Mask credential values passed as log context."""
    for key in event_dict.keys() & SECRET_KEYS:
        event_dict[key] = "***"
    return event_dict


def setup_logging(debug: bool) -> None:
    log_level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(level=log_level, format="%(message)s")

    # Driver and HTTP client logs are noisy below WARNING
    for name in ("pymongo", "httpx", "httpcore", "telegram"):
        logging.getLogger(name).setLevel(logging.WARNING)

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        drop_secrets,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
