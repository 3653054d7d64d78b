"""
Parameter Pydantic models for ranklist.

Tunable constants of the strength model and the matchup sampler.
"""

from pydantic import BaseModel, Field, field_validator

from ranklist.core.constants import (
    MIN_ABILITY,
    DISPLAY_BASE,
    DISPLAY_SCALE,
    TOP_BIAS_POWER,
    PROXIMITY_ALPHA,
    RECENT_PAIR_PENALTY,
    MIN_WEIGHT,
    WILSON_Z,
)


class EngineParams(BaseModel):
    """Bradley-Terry strength model parameters."""

    min_ability: float = Field(
        default=MIN_ABILITY,
        gt=0.0,
        description="Floor applied to every ability value"
    )
    display_base: float = Field(
        default=DISPLAY_BASE,
        description="Display rating of an average item"
    )
    display_scale: float = Field(
        default=DISPLAY_SCALE,
        gt=0.0,
        description="Display points per unit of log-ability"
    )

    model_config = {"extra": "forbid"}


class SamplerParams(BaseModel):
    """Informative matchup sampler parameters."""

    top_bias_power: float = Field(
        default=TOP_BIAS_POWER,
        ge=0.0,
        description="Exponent on normalized ability for the first pick"
    )
    proximity_alpha: float = Field(
        default=PROXIMITY_ALPHA,
        ge=0.0,
        description="Decay rate of the ability gap for the second pick"
    )
    recent_pair_penalty: float = Field(
        default=RECENT_PAIR_PENALTY,
        gt=0.0,
        le=1.0,
        description="Weight multiplier for repeating the previous matchup"
    )
    min_weight: float = Field(
        default=MIN_WEIGHT,
        gt=0.0,
        description="Floor for every sampling weight"
    )
    wilson_z: float = Field(
        default=WILSON_Z,
        gt=0.0,
        description="Z-score of the confidence interval used for uncertainty"
    )

    model_config = {"extra": "forbid"}

    @field_validator("min_weight")
    @classmethod
    def validate_min_weight(cls, v: float) -> float:
        """Keep the floor tiny so it never dominates real weights."""
        if v >= 1e-3:
            raise ValueError(f"min_weight must be below 1e-3, got {v}")
        return v
