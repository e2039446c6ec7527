"""Ordered rule table for describing day-over-day weather changes.

Rules are evaluated top to bottom and the first rule whose condition holds
decides the label. The order is part of the contract: rule 7 repeats the
condition of rule 6 and rule 11 repeats the condition of rule 10, so neither
can ever fire. Both stay in place.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .models import SeasonalRange, WeatherObservation

HOT_TEMPERATURE = 34
COLD_TEMPERATURE = 10
TEMPERATURE_RISE_THRESHOLD = 5
TEMPERATURE_DROP_THRESHOLD = -5
FEEL_TEMPERATURE_RISE_THRESHOLD = 5
FEEL_TEMPERATURE_DROP_THRESHOLD = -5
TEMPERATURE_STABLE_RANGE = 5
EXTREME_TEMPERATURE_CHANGE = 10
COMFORTABLE_HIGH_TEMP = 30
COMFORTABLE_LOW_TEMP = 20
WIND_CHILL_DIFFERENCE = -5
HEAT_INDEX_DIFFERENCE = 5

DEFAULT_LABEL = "little change"
DEFAULT_LABEL_ZH = "天氣變化不大"
DEFAULT_CODE = "little_change"


@dataclass(frozen=True)
class RuleContext:
    """Both observations plus the seasonal bands derived from their dates."""

    today: WeatherObservation
    tomorrow: WeatherObservation
    today_range: SeasonalRange
    tomorrow_range: SeasonalRange


@dataclass(frozen=True)
class ClassificationRule:
    """One guarded entry of the cascade."""

    number: int
    code: str
    label: str
    label_zh: str
    condition: str
    predicate: Callable[[RuleContext], bool]

    def matches(self, context: RuleContext) -> bool:
        return self.predicate(context)


def _tomorrow_spread(c: RuleContext) -> int:
    return abs(c.tomorrow.high - c.tomorrow.low)


def _swing_delta(c: RuleContext) -> int:
    # Measured against tomorrow's high on both sides.
    return _tomorrow_spread(c) - abs(c.tomorrow.high - c.today.low)


def _feel_gap(c: RuleContext) -> int:
    return abs(c.tomorrow.feel - c.tomorrow.high)


RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        1,
        "turning_hotter",
        "turning hotter",
        "天氣變熱",
        "tomorrow.high - today.high > 5",
        lambda c: c.tomorrow.high - c.today.high > TEMPERATURE_RISE_THRESHOLD,
    ),
    ClassificationRule(
        2,
        "very_hot",
        "very hot",
        "非常炎熱",
        "tomorrow.high > 34 or today.high > 34",
        lambda c: c.tomorrow.high > HOT_TEMPERATURE or c.today.high > HOT_TEMPERATURE,
    ),
    ClassificationRule(
        3,
        "very_cold",
        "very cold",
        "非常寒冷",
        "tomorrow.high < 10 or today.high < 10",
        lambda c: c.tomorrow.high < COLD_TEMPERATURE or c.today.high < COLD_TEMPERATURE,
    ),
    ClassificationRule(
        4,
        "warmer_nights",
        "warmer nights",
        "夜晚變暖",
        "tomorrow.low - today.low > 5",
        lambda c: c.tomorrow.low - c.today.low > TEMPERATURE_RISE_THRESHOLD,
    ),
    ClassificationRule(
        5,
        "feels_hotter",
        "feels hotter",
        "體感變熱",
        "tomorrow.feel - today.feel > 5",
        lambda c: c.tomorrow.feel - c.today.feel > FEEL_TEMPERATURE_RISE_THRESHOLD,
    ),
    ClassificationRule(
        6,
        "feels_colder",
        "feels colder",
        "體感變冷",
        "tomorrow.feel - today.feel < -5",
        lambda c: c.tomorrow.feel - c.today.feel < FEEL_TEMPERATURE_DROP_THRESHOLD,
    ),
    ClassificationRule(
        7,
        "turning_colder",
        "turning colder",
        "天氣變冷",
        "tomorrow.feel - today.feel < -5",
        lambda c: c.tomorrow.feel - c.today.feel < TEMPERATURE_DROP_THRESHOLD,
    ),
    ClassificationRule(
        8,
        "wider_swing",
        "wider temperature swing",
        "溫差變大",
        "|tomorrow.high - tomorrow.low| - |tomorrow.high - today.low| > 5",
        lambda c: _swing_delta(c) > TEMPERATURE_STABLE_RANGE,
    ),
    ClassificationRule(
        9,
        "narrower_swing",
        "narrower temperature swing",
        "溫差變小",
        "|tomorrow.high - tomorrow.low| - |tomorrow.high - today.low| < -5",
        lambda c: _swing_delta(c) < -TEMPERATURE_STABLE_RANGE,
    ),
    ClassificationRule(
        10,
        "feel_gap_widening",
        "feels-like gap widening",
        "體感溫度差變大",
        "|tomorrow.feel - tomorrow.high| > 5",
        lambda c: _feel_gap(c) > HEAT_INDEX_DIFFERENCE,
    ),
    ClassificationRule(
        11,
        "feel_gap_narrowing",
        "feels-like gap narrowing",
        "體感溫度差變小",
        "|tomorrow.feel - tomorrow.high| > 5",
        lambda c: _feel_gap(c) > HEAT_INDEX_DIFFERENCE,
    ),
    ClassificationRule(
        12,
        "feels_sweltering",
        "feels sweltering",
        "體感變炎熱",
        "today.feel > 30 or tomorrow.feel > 30",
        lambda c: c.today.feel > COMFORTABLE_HIGH_TEMP or c.tomorrow.feel > COMFORTABLE_HIGH_TEMP,
    ),
    ClassificationRule(
        13,
        "feels_cool",
        "feels cool",
        "體感變涼爽",
        "today.feel < 20 or tomorrow.feel < 20",
        lambda c: c.today.feel < COMFORTABLE_LOW_TEMP or c.tomorrow.feel < COMFORTABLE_LOW_TEMP,
    ),
    ClassificationRule(
        14,
        "feels_humid_hot",
        "feels humid-hot",
        "體感變悶熱",
        "today.feel - today.high > 5 or tomorrow.feel - tomorrow.high > 5",
        lambda c: (
            c.today.feel - c.today.high > HEAT_INDEX_DIFFERENCE
            or c.tomorrow.feel - c.tomorrow.high > HEAT_INDEX_DIFFERENCE
        ),
    ),
    ClassificationRule(
        15,
        "feels_wind_chilled",
        "feels wind-chilled",
        "體感變風寒",
        "today.feel - today.high < -5 or tomorrow.feel - tomorrow.high < -5",
        lambda c: (
            c.today.feel - c.today.high < WIND_CHILL_DIFFERENCE
            or c.tomorrow.feel - c.tomorrow.high < WIND_CHILL_DIFFERENCE
        ),
    ),
    ClassificationRule(
        16,
        "stable_temperature",
        "stable temperature",
        "溫度變化平穩",
        "|tomorrow.high - tomorrow.low| < 5",
        lambda c: _tomorrow_spread(c) < TEMPERATURE_STABLE_RANGE,
    ),
    ClassificationRule(
        17,
        "sharp_swing",
        "sharp temperature swing",
        "溫度變化劇烈",
        "|tomorrow.high - tomorrow.low| < 10",
        lambda c: _tomorrow_spread(c) < EXTREME_TEMPERATURE_CHANGE,
    ),
    ClassificationRule(
        18,
        "sudden_spike",
        "sudden temperature spike",
        "氣溫驟升",
        "today.high < today_range.high and tomorrow.high > tomorrow_range.high + 5",
        lambda c: (
            c.today.high < c.today_range.high
            and c.tomorrow.high > c.tomorrow_range.high + TEMPERATURE_RISE_THRESHOLD
        ),
    ),
    ClassificationRule(
        19,
        "sudden_drop",
        "sudden temperature drop",
        "氣溫驟降",
        "today.low > today_range.low and tomorrow.low < tomorrow_range.low - (-5)",
        # Subtracting the negative drop threshold widens the band upwards.
        lambda c: (
            c.today.low > c.today_range.low
            and c.tomorrow.low < c.tomorrow_range.low - TEMPERATURE_DROP_THRESHOLD
        ),
    ),
)


def all_labels() -> tuple[str, ...]:
    """The fixed label set in rule order, default last.

    Includes the labels of rules 7 and 11 even though their conditions are
    shadowed by the rules directly above them.
    """
    return tuple(rule.label for rule in RULES) + (DEFAULT_LABEL,)
