"""
Dual-mode diagnostic logging for the build step.

Provides human-readable console logs by default and JSON structured logs
for CI systems that ingest them.
"""

import logging
import os
import sys


def setup_logger(name: str = "buildstep", default_level: str = "WARNING") -> logging.Logger:
    """
    Setup dual-mode logger for the build step.

    Parameters
    ----------
    name : str, optional
        Logger name. Module loggers under this name propagate to it.
    default_level : str, optional
        Level used when LOG_LEVEL is unset, by default "WARNING".

    Returns
    -------
    logging.Logger
        Configured logger instance

    Environment Variables
    ---------------------
    LOG_FORMAT : str
        "text" (console, default) or "json" (structured)
    LOG_LEVEL : str
        Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL
    """
    logger = logging.getLogger(name)

    log_level = os.getenv("LOG_LEVEL", default_level).upper()
    logger.setLevel(getattr(logging, log_level, logging.WARNING))

    # Remove existing handlers to avoid duplicates if called multiple times
    logger.handlers.clear()

    log_format = os.getenv("LOG_FORMAT", "text").lower()

    # stdout belongs to docker build output
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logger.level)

    if log_format == "json":
        formatter = _create_json_formatter(name)
    else:
        formatter = _create_text_formatter(name)

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logger.propagate = False

    return logger


def _create_json_formatter(component: str) -> logging.Formatter:
    """
    Create JSON formatter using python-json-logger.

    Renames ``levelname`` to ``severity`` and tags every entry with the
    component name.
    """
    from pythonjsonlogger.json import JsonFormatter

    class StepFormatter(JsonFormatter):
        def add_fields(self, log_record, record, message_dict):
            super().add_fields(log_record, record, message_dict)
            log_record["component"] = component
            if "levelname" in log_record:
                log_record["severity"] = log_record.pop("levelname")

    return StepFormatter(
        fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )


def _create_text_formatter(component: str) -> logging.Formatter:
    """Create human-readable formatter."""
    return logging.Formatter(
        fmt=f"%(asctime)s {component} %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
