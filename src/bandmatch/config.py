"""Configuration: factor weights, distance thresholds, ranking defaults."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringWeights(BaseModel):
    # Not normalised: weights summing past 1.0 push `overall` past 100.
    location: float = Field(default=0.25, ge=0.0)
    genres: float = Field(default=0.30, ge=0.0)
    instruments: float = Field(default=0.25, ge=0.0)
    experience: float = Field(default=0.10, ge=0.0)
    activity: float = Field(default=0.10, ge=0.0)

    model_config = {"frozen": True}


class ScoringConfig(BaseModel):
    weights: ScoringWeights = ScoringWeights()
    location_decay_distance: float = Field(default=25.0, ge=0.0)
    max_distance: float = Field(default=100.0, ge=0.0)
    # Carried for compatibility with stored configs; the genre and instrument
    # scorers use their own fixed boost constants.
    genre_boost_multiplier: float = Field(default=1.2, ge=0.0)
    instrument_complement_bonus: float = Field(default=15.0, ge=0.0)
    skill_level_tolerance: float = Field(default=1.0, ge=0.0)

    model_config = {"frozen": True}


DEFAULT_CONFIG = ScoringConfig()


class Settings(BaseSettings):
    """Defaults for candidate ranking; the scorers themselves read no env."""

    min_score: int = 30
    top_k: int | None = 20

    model_config = SettingsConfigDict(
        env_prefix="BANDMATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
