# acme/core/logging_config.py
import logging
import sys
from typing import Optional

import structlog

from acme.settings import get_settings


def setup_logging(level: Optional[str] = None, json: Optional[bool] = None) -> None:
    """
    Configure structlog + standard logging.
    Logs go to stdout, as JSON unless `json` (or Settings.log_json) is false.
    """
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    use_json = settings.log_json if json is None else json

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name, logging.INFO),
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
