"""
Shared Test Fixtures

Centralized factories and generators used across all test layers.

Structure:
    - common.py: Request payload factories
    - generators.py: Random data generators
"""

# Common utilities
from .common import make_project_create_request

# Random generators
from .generators import random_amounts

__all__ = [
    "make_project_create_request",
    "random_amounts",
]
