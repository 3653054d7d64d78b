"""
Global configuration settings for ranklist.

Loads configuration from environment variables and provides
typed access to all system settings.
"""

import os
from typing import Optional, Dict, Any
from dataclasses import dataclass

from dotenv import load_dotenv

from ranklist.core.constants import (
    INITIAL_FIT_ITERATIONS,
    UPDATE_FIT_ITERATIONS,
    SAMPLER_INFORMATIVE,
    SAMPLER_STRATEGIES,
)

load_dotenv()


@dataclass
class Settings:
    """Global settings for ranklist."""

    # Locations
    assets_dir: str = "assets"
    state_dir: str = ".ranklist"

    # Fitting budget (latency/accuracy tradeoff)
    initial_fit_iterations: int = INITIAL_FIT_ITERATIONS
    update_fit_iterations: int = UPDATE_FIT_ITERATIONS

    # Matchup sampling
    sampler_strategy: str = SAMPLER_INFORMATIVE

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def __post_init__(self):
        """Load settings from environment variables."""
        self.assets_dir = os.getenv("RANKLIST_ASSETS_DIR", self.assets_dir)
        self.state_dir = os.getenv("RANKLIST_STATE_DIR", self.state_dir)
        self.log_level = os.getenv("LOG_LEVEL", self.log_level)
        self.sampler_strategy = os.getenv("RANKLIST_SAMPLER_STRATEGY", self.sampler_strategy)

        if os.getenv("RANKLIST_INITIAL_FIT_ITERATIONS"):
            self.initial_fit_iterations = int(os.getenv("RANKLIST_INITIAL_FIT_ITERATIONS"))
        if os.getenv("RANKLIST_UPDATE_FIT_ITERATIONS"):
            self.update_fit_iterations = int(os.getenv("RANKLIST_UPDATE_FIT_ITERATIONS"))

        self.validate()

    def validate(self) -> None:
        """
        Check value ranges.

        Raises:
            ValueError: If a setting is out of range
        """
        if self.initial_fit_iterations < 0 or self.update_fit_iterations < 0:
            raise ValueError("Fit iteration counts must be non-negative")
        if self.sampler_strategy not in SAMPLER_STRATEGIES:
            raise ValueError(
                f"Unknown sampler strategy '{self.sampler_strategy}', "
                f"expected one of {', '.join(SAMPLER_STRATEGIES)}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "assets_dir": self.assets_dir,
            "state_dir": self.state_dir,
            "initial_fit_iterations": self.initial_fit_iterations,
            "update_fit_iterations": self.update_fit_iterations,
            "sampler_strategy": self.sampler_strategy,
            "log_level": self.log_level,
        }


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(**kwargs) -> Settings:
    """
    Configure global settings.

    Args:
        **kwargs: Settings to override (unknown names are ignored)

    Returns:
        Configured Settings instance
    """
    settings = get_settings()

    for key, value in kwargs.items():
        if hasattr(settings, key):
            setattr(settings, key, value)

    settings.validate()
    return settings


def reset_settings() -> None:
    """Drop the global settings instance so the next access re-reads the environment."""
    global _settings
    _settings = None
