"""
System constants for ranklist.

Bradley-Terry strength model, informative matchup sampling and persistence.
"""

# =============================================================================
# Strength Model
# =============================================================================

# Lower bound for every ability value
MIN_ABILITY: float = 1e-6

# Display rating = DISPLAY_BASE + DISPLAY_SCALE * ln(ability * n)
DISPLAY_BASE: float = 1000.0
DISPLAY_SCALE: float = 100.0

# Fitting passes when a list is opened
INITIAL_FIT_ITERATIONS: int = 50

# Fitting passes after a single recorded comparison
UPDATE_FIT_ITERATIONS: int = 10

# =============================================================================
# Matchup Sampling
# =============================================================================

# Exponent applied to normalized ability for the first pick
# Small values favor strong items mildly rather than overwhelmingly
TOP_BIAS_POWER: float = 0.15

# Exponential decay rate of the ability gap for the second pick
PROXIMITY_ALPHA: float = 4.0

# Weight multiplier for repeating the previous matchup
RECENT_PAIR_PENALTY: float = 0.35

# Floor for every sampling weight
MIN_WEIGHT: float = 1e-9

# Z-score of the Wilson-style confidence interval (95%)
WILSON_Z: float = 1.96

SAMPLER_INFORMATIVE: str = "informative"
SAMPLER_UNIFORM: str = "uniform"
SAMPLER_STRATEGIES = (SAMPLER_INFORMATIVE, SAMPLER_UNIFORM)

# =============================================================================
# Persistence
# =============================================================================

# Blob store key holding the whole application state
STORAGE_KEY: str = "ranking_lists_state"
