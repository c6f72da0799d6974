# File: src/penetration_generator/config/__init__.py

"""
Configuration package for the wall penetration generator.
"""

from .settings import (
    ENV_PREFIX,
    PenetrationSettings,
    load_settings,
)

__all__ = [
    "ENV_PREFIX",
    "PenetrationSettings",
    "load_settings",
]
