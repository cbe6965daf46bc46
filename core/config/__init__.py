#!/usr/bin/env python3
"""Modular configuration system for the crowdfund service

Configuration hierarchy:
- crowdfund_config: Service settings, peer service URLs, ledger rules
- logging_config: Logging configuration
"""
import os
from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .crowdfund_config import CrowdfundConfig

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}
env_file = env_files.get(env, "deployment/environments/dev.env")
load_dotenv(env_file, override=False)

# Create global settings instance
settings = CrowdfundConfig.from_env()

def get_settings() -> CrowdfundConfig:
    """Get global settings instance"""
    return settings

def reload_settings() -> CrowdfundConfig:
    """Reload settings from environment"""
    global settings
    settings = CrowdfundConfig.from_env()
    return settings


__all__ = [
    "LoggingConfig",
    "CrowdfundConfig",
    "settings",
    "get_settings",
    "reload_settings",
]
