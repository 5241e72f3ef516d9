"""
Structured JSON logging with structlog.
Every provider call, rejection and detection is one JSON line, easy to grep and filter.
"""

import logging
import structlog

_configured = False
_service_name = "multillm-proxy"


def configure_logging(level: str = "INFO", service_name: str | None = None):
    global _configured, _service_name
    if service_name:
        _service_name = service_name
    if _configured:
        return
    lvl = logging.getLevelName(level.upper())
    if not isinstance(lvl, int):
        lvl = logging.INFO
    logging.basicConfig(level=lvl, format="%(message)s")
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(lvl),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
    _configured = True


def get_logger():
    return structlog.get_logger(_service_name)
