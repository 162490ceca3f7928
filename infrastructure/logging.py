import logging
import logging.handlers
import sys

import structlog

from infrastructure.config import Settings, settings as default_settings

# Third-party loggers that emit one record per HTTP request at DEBUG.
NOISY_LOGGERS = ("fsspec", "aiohttp", "urllib3")

_HANDLER_MARKER = "_blob_steward_handler"


def _processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _mark(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_MARKER, True)
    return handler


def _remove_own_handlers(root_logger: logging.Logger) -> None:
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()


def setup_logging(settings: Settings = default_settings) -> None:
    """Configure structlog and the standard library to share one pipeline.

    Records go to stdout and to a midnight-rotating ``{app_env}.log`` under
    ``log_dir``; development renders for the console, other environments as JSON.
    Calling this again replaces the handlers installed by the previous call.
    """
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    log_file = settings.log_dir / f"{settings.app_env}.log"

    common_processors = _processors()
    if settings.app_env == "development":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *common_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=common_processors,
        processor=renderer,
    )

    stream_handler = _mark(logging.StreamHandler(sys.stdout))
    file_handler = _mark(
        logging.handlers.TimedRotatingFileHandler(
            log_file,
            when="midnight",
            interval=1,
            backupCount=7,
        ),
    )

    root_logger = logging.getLogger()
    _remove_own_handlers(root_logger)
    for handler in (stream_handler, file_handler):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level.upper())

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(max(root_logger.level, logging.INFO))

    structlog.contextvars.bind_contextvars(app=settings.app_name, env=settings.app_env)
