"""Classify how tomorrow's weather differs from today's."""

from .classifier import WeatherChangeClassifier, describe_weather_change
from .exceptions import DateParseError, InputDecodeError, WeatherChangeError
from .models import RuleMatch, SeasonalRange, WeatherObservation
from .rules import DEFAULT_LABEL, RULES, ClassificationRule, all_labels

__all__ = [
    "DEFAULT_LABEL",
    "RULES",
    "ClassificationRule",
    "DateParseError",
    "InputDecodeError",
    "RuleMatch",
    "SeasonalRange",
    "WeatherChangeClassifier",
    "WeatherChangeError",
    "WeatherObservation",
    "all_labels",
    "describe_weather_change",
]
