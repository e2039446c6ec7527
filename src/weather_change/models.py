"""Typed models for weather observations and classification diagnostics."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator


class WeatherObservation(BaseModel):
    """One day's readings as supplied by the caller."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    high: StrictInt = Field(description="Daily high temperature in degrees C")
    low: StrictInt = Field(description="Daily low temperature in degrees C")
    feel: StrictInt = Field(description="Feels-like temperature in degrees C")
    date: StrictStr = Field(description="Calendar date as YYYY-MM-DD")

    @field_validator("high", "low", "feel", mode="before")
    @classmethod
    def whole_number_floats_to_int(cls, value: Any) -> Any:
        """Accept JSON numbers like 28.0; other floats still fail strict int checks."""
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value


class SeasonalRange(BaseModel):
    """Reference high/low temperatures for a calendar month."""

    model_config = ConfigDict(frozen=True)

    high: int
    low: int


class RuleMatch(BaseModel):
    """Which rule decided a classification; `number` is None for the default label."""

    model_config = ConfigDict(frozen=True)

    number: int | None = Field(default=None, ge=1)
    code: str
    label: str

    @property
    def is_default(self) -> bool:
        return self.number is None
