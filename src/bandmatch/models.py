"""Pydantic v2 data models: the data contracts flowing through the engine."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

SkillLevel = Literal["beginner", "intermediate", "advanced", "expert"]

LookingFor = Literal["band", "jam_session", "collaboration", "lessons", "any"]

# Stored records sometimes carry labels outside the enum.
SKILL_LEVEL_ALIASES: dict[str, SkillLevel] = {"professional": "expert"}


# ---------------------------------------------------------------------------
# Profile building blocks
# ---------------------------------------------------------------------------

class Location(BaseModel):
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    city: str | None = None
    region: str | None = None
    country: str | None = None

    model_config = {"frozen": True}


class GenrePreference(BaseModel):
    id: str
    name: str
    preference: int = Field(default=3, ge=0)
    parent_genre_id: str | None = None


class InstrumentSkill(BaseModel):
    id: str
    name: str
    category: str = ""
    skill_level: SkillLevel = "intermediate"
    years_of_experience: float = Field(default=0.0, ge=0.0)
    is_primary: bool = False

    @field_validator("skill_level", mode="before")
    @classmethod
    def _resolve_alias(cls, value: object) -> object:
        if isinstance(value, str):
            return SKILL_LEVEL_ALIASES.get(value, value)
        return value


class AgeRange(BaseModel):
    min: int = 18
    max: int = 65

    @model_validator(mode="after")
    def _check_bounds(self) -> AgeRange:
        if self.min > self.max:
            raise ValueError(f"age range min {self.min} exceeds max {self.max}")
        return self


# ---------------------------------------------------------------------------
# Match profile
# ---------------------------------------------------------------------------

class UserMatchProfile(BaseModel):
    id: str
    user_id: str
    location: Location
    genres: list[GenrePreference] = Field(default_factory=list)
    instruments: list[InstrumentSkill] = Field(default_factory=list)
    skill_level_average: float = 2.0
    activity_score: float = Field(default=0.0, ge=0.0, le=100.0)
    last_active: datetime
    is_active: bool = True
    search_radius: float = Field(default=50.0, ge=0.0)
    age_range: AgeRange = Field(default_factory=AgeRange)
    looking_for: LookingFor = "any"
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def _fill_updated_at(self) -> UserMatchProfile:
        if self.updated_at is None:
            self.updated_at = self.last_active
        return self


# ---------------------------------------------------------------------------
# Scorer outputs
# ---------------------------------------------------------------------------

class LocationResult(BaseModel):
    score: int
    distance: float


class GenreResult(BaseModel):
    score: int
    common_genres: list[str] = Field(default_factory=list)
    explanation: list[str] = Field(default_factory=list)


class InstrumentResult(BaseModel):
    score: int
    complementarity: list[str] = Field(default_factory=list)
    explanation: list[str] = Field(default_factory=list)


class MatchFactors(BaseModel):
    location: int = 0
    genres: int = 0
    instruments: int = 0
    experience: int = 0
    activity: int = 0


class MatchScore(BaseModel):
    overall: int
    factors: MatchFactors
    explanation: list[str] = Field(default_factory=list)
    confidence: float = Field(ge=0.0, le=1.0)


class MatchCandidate(BaseModel):
    profile: UserMatchProfile
    score: MatchScore
    distance: float
