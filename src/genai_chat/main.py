"""Application entrypoint - aiohttp server for the chat UI backend."""

import logging

import httpx
import structlog
from aiohttp.web import Application, run_app

from genai_chat.api import setup_routes
from genai_chat.config import Settings, get_settings
from genai_chat.llm.client import LLMClient
from genai_chat.llm.search import SemanticSearchClient


def configure_logging(
    log_level: str = "INFO",
    log_file: str = "",
    log_file_max_bytes: int = 10_485_760,
    log_file_backup_count: int = 5,
) -> None:
    """Configure structlog and standard library logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file. Empty string = console only.
        log_file_max_bytes: Max size per log file before rotation (default: 10 MB)
        log_file_backup_count: Number of rotated backup files to keep (default: 5)
    """
    from logging.handlers import RotatingFileHandler
    from pathlib import Path

    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.root
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=log_file,
            maxBytes=log_file_max_bytes,
            backupCount=log_file_backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(file_handler)

    # httpx logs every request at INFO; keep it at WARNING unless debugging
    if level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            # JSON lines in files, coloured key/value output on the console
            structlog.processors.JSONRenderer() if log_file else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger()


async def _close_http_client(app: Application) -> None:
    await app["http_client"].aclose()


def create_app(
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> Application:
    """Create and configure the aiohttp application.

    Args:
        settings: Application settings. Loaded from the environment when omitted.
        http_client: Shared client for upstream calls. Closed on app cleanup.
    """
    settings = settings or get_settings()
    if http_client is None:
        http_client = httpx.AsyncClient(timeout=settings.upstream_timeout)

    llm_client = LLMClient(settings, http_client)
    logger.info("llm_client_initialized", provider=settings.provider, url=llm_client.chat_url)

    search_client = None
    if settings.context_injection:
        search_client = SemanticSearchClient(settings.semantic_search_api, http_client)
        logger.info("context_injection_enabled", url=settings.semantic_search_api)

    app = Application()
    app["settings"] = settings
    app["http_client"] = http_client
    app["llm_client"] = llm_client
    app["search_client"] = search_client
    app.on_cleanup.append(_close_http_client)

    setup_routes(app)

    return app


def main() -> None:
    """Run the chat backend server."""
    settings = get_settings()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        log_file_max_bytes=settings.log_file_max_bytes,
        log_file_backup_count=settings.log_file_backup_count,
    )

    logger.info(
        "starting_chat_server",
        host=settings.host,
        port=settings.port,
        provider=settings.provider,
        log_level=settings.log_level,
    )

    app = create_app(settings)
    run_app(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
