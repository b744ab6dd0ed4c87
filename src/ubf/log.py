"""Logging setup for command-line use.

The library emits structlog debug events through stdlib loggers named after
its modules, so they stay silent until the application configures logging.
The ubf CLI calls setup_logging() to route them to stderr so that stdout
carries nothing but command output.
"""

from __future__ import annotations

import logging
import logging.config
from typing import Any

import structlog


def get_logger(name: str) -> Any:
    """Return a structlog logger backed by the stdlib logger ``name``."""
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def setup_logging(debug: bool = False, json: bool = False) -> None:
    """Route structlog through stdlib logging to stderr.

    Args:
        debug: Emit debug events (codec start/finish/failure) when True,
            otherwise only warnings and above
        json: Render one JSON document per event instead of console text
    """
    timestamper = structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S")
    pre_chain = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        timestamper,
    ]

    renderer: Any
    if json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "ubf": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processor": renderer,
                "foreign_pre_chain": pre_chain,
            },
        },
        "handlers": {
            "stderr": {
                "level": "DEBUG",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "ubf",
            },
        },
        "loggers": {
            "": {
                "handlers": ["stderr"],
                "level": "DEBUG" if debug else "WARNING",
            },
        },
    })

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
