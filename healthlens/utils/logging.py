# /healthlens/utils/logging.py

import logging
import sys
import structlog
from healthlens.config.settings import settings

# Flow events and library logs (uvicorn, google-genai, tenacity) share one
# renderer: readable console lines in development, JSON everywhere else.
# Request context bound in the HTTP middleware is merged into every event.

HANDLER_NAME = "healthlens"
NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "uvicorn.access")


def _renderer():
    if settings.environment == "development":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging(level: str | None = None):
    """
    Routes structlog and stdlib logging through one ProcessorFormatter.

    Calling it again (each app startup in tests) swaps the handler instead of
    stacking a second one.
    """
    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=_renderer(), foreign_pre_chain=pre_chain))

    root_logger = logging.getLogger()
    for existing in [h for h in root_logger.handlers if h.get_name() == HANDLER_NAME]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level or settings.log_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
