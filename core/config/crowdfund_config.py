#!/usr/bin/env python3
"""Crowdfund service main configuration

Combines the logging sub-config with the ledger and collaborator settings
used by the crowdfund microservice.
"""
import os
from dataclasses import dataclass, field

from .logging_config import LoggingConfig


def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class CrowdfundConfig:
    """Main crowdfund service configuration with sub-configs"""

    # Environment
    environment: str = "development"
    debug: bool = False

    # Service settings
    service_name: str = "crowdfund_service"
    service_host: str = "0.0.0.0"
    service_port: int = 8260

    # Peer services
    wallet_service_url: str = "http://localhost:8208"
    wallet_timeout_seconds: float = 10.0

    # Event bus
    nats_enabled: bool = False
    nats_url: str = "nats://localhost:4222"

    # Ledger rules
    duration_unit: str = "days"
    withdrawal_policy: str = "single"

    # Sub-configurations
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> 'CrowdfundConfig':
        """Load complete configuration from environment"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        timeout = os.getenv("WALLET_TIMEOUT_SECONDS", "")
        return cls(
            environment=env,
            debug=_bool(os.getenv("DEBUG", "true" if env == "development" else "false")),

            service_name=os.getenv("SERVICE_NAME", "crowdfund_service"),
            service_host=os.getenv("HOST", "0.0.0.0"),
            service_port=_int(os.getenv("CROWDFUND_SERVICE_PORT", ""), 8260),

            wallet_service_url=os.getenv("WALLET_SERVICE_URL", "http://localhost:8208"),
            wallet_timeout_seconds=float(timeout) if timeout else 10.0,

            nats_enabled=_bool(os.getenv("NATS_ENABLED", "false")),
            nats_url=os.getenv("NATS_URL", "nats://localhost:4222"),

            duration_unit=os.getenv("CROWDFUND_DURATION_UNIT", "days").lower(),
            withdrawal_policy=os.getenv("CROWDFUND_WITHDRAWAL_POLICY", "single").lower(),

            logging=LoggingConfig.from_env(),
        )
