"""
Configuration module for ranklist.

Provides settings management and algorithm parameter models.
"""

from ranklist.config.settings import Settings, get_settings, configure, reset_settings
from ranklist.config.params import EngineParams, SamplerParams

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "configure",
    "reset_settings",
    # Parameters
    "EngineParams",
    "SamplerParams",
]
