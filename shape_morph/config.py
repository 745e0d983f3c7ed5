"""Library configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables (SHAPE_MORPH_*) and .env.

    Priority: environment variables > .env > defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="SHAPE_MORPH_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Arc-length search (find_time_by_distance)
    find_time_epsilon: float = 0.001  # convergence threshold on the length difference
    # Smallest step exponent before giving up; the search starts at -2
    find_time_max_depth: int = Field(default=-100, le=-3)

    # Curve measurement
    arc_length_samples: int = 24  # Legendre-Gauss nodes for arc length
    projection_lut_steps: int = 100  # coarse samples before refining a projection

    # Logging
    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
