"""Day-over-day weather change classifier."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import ValidationError

from .exceptions import DateParseError, InputDecodeError
from .models import RuleMatch, WeatherObservation
from .rules import DEFAULT_CODE, DEFAULT_LABEL, RULES, ClassificationRule, RuleContext
from .seasonal import seasonal_range_for

ObservationInput = WeatherObservation | Mapping[str, Any]

_DATE_RE = re.compile(r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})")


def parse_observation(
    value: ObservationInput, *, field: str = "observation"
) -> WeatherObservation:
    """Decode a raw record into a WeatherObservation, raising InputDecodeError."""
    if isinstance(value, WeatherObservation):
        return value
    if not isinstance(value, Mapping):
        raise InputDecodeError(
            f"{field} must be an object, got {type(value).__name__}.",
            field=field,
        )
    try:
        return WeatherObservation.model_validate(dict(value))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or field}: {error['msg']}"
            for error in exc.errors()
        )
        raise InputDecodeError(f"Invalid {field} record: {problems}", field=field) from exc


def parse_observation_date(value: str, *, field: str = "date") -> date:
    """Parse a strict YYYY-MM-DD string into a calendar date."""
    match = _DATE_RE.fullmatch(value)
    if match is None:
        raise DateParseError(
            f"{field} must be formatted YYYY-MM-DD, got {value!r}.",
            field=field,
            value=value,
        )
    try:
        return date(int(match["year"]), int(match["month"]), int(match["day"]))
    except ValueError as exc:
        raise DateParseError(
            f"{field} is not a valid calendar date: {value!r} ({exc}).",
            field=field,
            value=value,
        ) from exc


class WeatherChangeClassifier:
    """Pick one phrase describing how tomorrow's weather differs from today's."""

    def __init__(
        self,
        rules: tuple[ClassificationRule, ...] = RULES,
        logger: logging.Logger | None = None,
    ) -> None:
        self.rules = rules
        self.logger = logger or logging.getLogger("weather_change.classifier")

    def classify(self, today: ObservationInput, tomorrow: ObservationInput) -> str:
        """Return the label of the first matching rule, or the default label."""
        return self.explain(today, tomorrow).label

    def explain(self, today: ObservationInput, tomorrow: ObservationInput) -> RuleMatch:
        """Classify and report which rule decided the label."""
        context = self._build_context(today, tomorrow)
        for rule in self.rules:
            if rule.matches(context):
                self.logger.debug(
                    "Rule %d (%s) matched.",
                    rule.number,
                    rule.code,
                    extra={"rule_number": rule.number, "rule_code": rule.code, "label": rule.label},
                )
                return RuleMatch(number=rule.number, code=rule.code, label=rule.label)
        self.logger.debug(
            "No rule matched; using default label.",
            extra={"rule_number": None, "rule_code": DEFAULT_CODE, "label": DEFAULT_LABEL},
        )
        return RuleMatch(number=None, code=DEFAULT_CODE, label=DEFAULT_LABEL)

    def matching_rules(
        self, today: ObservationInput, tomorrow: ObservationInput
    ) -> list[ClassificationRule]:
        """Return every rule whose condition holds, in evaluation order."""
        context = self._build_context(today, tomorrow)
        return [rule for rule in self.rules if rule.matches(context)]

    def _build_context(self, today: ObservationInput, tomorrow: ObservationInput) -> RuleContext:
        today_obs = parse_observation(today, field="today")
        tomorrow_obs = parse_observation(tomorrow, field="tomorrow")
        today_date = parse_observation_date(today_obs.date, field="today.date")
        tomorrow_date = parse_observation_date(tomorrow_obs.date, field="tomorrow.date")
        return RuleContext(
            today=today_obs,
            tomorrow=tomorrow_obs,
            today_range=seasonal_range_for(today_date),
            tomorrow_range=seasonal_range_for(tomorrow_date),
        )


_DEFAULT_CLASSIFIER = WeatherChangeClassifier()


def describe_weather_change(today: ObservationInput, tomorrow: ObservationInput) -> str:
    """Classify a pair of raw observation records with the standard rule table."""
    return _DEFAULT_CLASSIFIER.classify(today, tomorrow)
