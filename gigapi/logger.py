#  Copyright ©  2025 SRI International.
#  This work is licensed under CC BY-NC-ND 4.0 license.
#  To view a copy of this license, visit https://creativecommons.org/licenses/by-nc-nd/4.0/

import logging
from logging.config import dictConfig
import structlog
from typing import Any

CONFIG_LOG = "gigapi"
_logger = None
pre_chain = [
    # Add the log level and producer to the event_dict if the log entry is not from structlog.
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
]

# gigapi log levels as used in LOGLEVEL -> stdlib levels
LEVELS = {
    "debug": "DEBUG",
    "info": "INFO",
    "warn": "WARNING",
    "warning": "WARNING",
    "error": "ERROR",
    "fatal": "CRITICAL",
}

def _config_dict(level: str, json_output: bool) -> dict[str, Any]:
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'gigapi-formatter': {
                '()': structlog.stdlib.ProcessorFormatter,
                'processor': structlog.dev.ConsoleRenderer(colors=False),
                'foreign_pre_chain': pre_chain,
            },
            'jsonformatter': {
                '()': structlog.stdlib.ProcessorFormatter,
                'processor': structlog.processors.JSONRenderer(sort_keys=False),
                'foreign_pre_chain': pre_chain,
            },
        },
        'handlers': {
            'structlog-console': {
                'level': level,
                'formatter': 'jsonformatter' if json_output else 'gigapi-formatter',
                'class': 'logging.StreamHandler',
                'stream': 'ext://sys.stderr',
            },
        },
        'loggers': {
            CONFIG_LOG: {
                'handlers': ['structlog-console'],
                'level': level,
                'propagate': True,
            },
        },
    }

def to_stdlib_level(level: str) -> str:
    """Map a gigapi log level name to a stdlib one; unknown names fall back to INFO."""
    return LEVELS.get(level.strip().lower(), "INFO")

def init_logging(level: str = "info", json_output: bool = False) -> Any:
    global _logger
    if _logger is not None:
        log = logging.getLogger(CONFIG_LOG)
        log.setLevel(to_stdlib_level(level))
        for handler in log.handlers:
            handler.setLevel(to_stdlib_level(level))
        return _logger

    dictConfig(_config_dict(to_stdlib_level(level), json_output))
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.filter_by_level,            # filter here for other processors
            structlog.processors.StackInfoRenderer(),    # Include the stack when stack_info=True
            structlog.processors.format_exc_info,        # Include the exception when exc_info=True
            structlog.processors.UnicodeDecoder(),       # Decodes the unicode values in any kv pairs
            structlog.processors.TimeStamper(fmt='%Y-%m-%d %H:%M:%S,%f'),
            # this must be the last one if further customizing formats below...
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _logger = structlog.get_logger(CONFIG_LOG)
    _logger.debug("Initialized logging for GigAPI", level=level)
    return _logger

def get_logger(component: str | None = None) -> Any:
    """
    Logger for the configuration layer. Works before init_logging(): structlog
    then uses its default configuration.
    """
    if component:
        return structlog.get_logger(CONFIG_LOG, component=component)
    return structlog.get_logger(CONFIG_LOG)
