#!/usr/bin/env python3
"""
Service logger setup

Configures the root handlers for a microservice process from LoggingConfig.
Modules keep using ``logging.getLogger(__name__)``; this only decides where
records go and at which level.
"""
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from core.config.logging_config import LoggingConfig


def setup_service_logger(
    service_name: str,
    level: Optional[str] = None,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Configure logging for a service and return its logger

    Args:
        service_name: Logger name (usually the service name)
        level: Optional level override (e.g. "INFO")
        config: Logging configuration, loaded from env when omitted

    Returns:
        Configured logger for the service
    """
    config = config or LoggingConfig.from_env()
    log_level = getattr(logging, (level or config.log_level).upper(), logging.INFO)
    formatter = logging.Formatter(config.log_format)

    root = logging.getLogger()
    root.setLevel(log_level)

    # Avoid stacking handlers when the app module is imported twice (reload, tests)
    if not getattr(root, "_crowdfund_configured", False):
        if config.enable_console:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            root.addHandler(console_handler)

        if config.log_file:
            log_dir = os.path.dirname(config.log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                config.log_file,
                maxBytes=config.log_file_max_bytes,
                backupCount=config.log_file_backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

        root._crowdfund_configured = True

    logger = logging.getLogger(service_name)
    logger.setLevel(log_level)
    return logger
