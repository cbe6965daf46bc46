#!/usr/bin/env python3
"""
Core Module for Microservices Architecture

Shared infrastructure components for the microservices in this repository.

COMPONENTS:
    - config/: Environment-driven dataclass configuration
    - logger.py: Service logger setup
    - nats_client.py: NATS event bus for event-driven architecture

USAGE:
    from core.config import get_settings
    from core.logger import setup_service_logger

    settings = get_settings()
    logger = setup_service_logger(settings.service_name)
"""

__version__ = "2.0.0"
