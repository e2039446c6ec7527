"""CLI: describe how tomorrow's weather differs from today's."""

from __future__ import annotations

import argparse
import json
import sys
import uuid
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from .classifier import WeatherChangeClassifier, parse_observation
from .config import load_settings
from .exceptions import ConfigError, InputFileError, JournalError, WeatherChangeError
from .journal import JournalWriter
from .log_setup import setup_logger
from .models import RuleMatch, WeatherObservation
from .rules import DEFAULT_CODE, DEFAULT_LABEL, DEFAULT_LABEL_ZH, RULES


def parse_args() -> argparse.Namespace:
    """Parse weather-change CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Classify the change between today's and tomorrow's weather."
    )
    parser.add_argument(
        "--today",
        default=None,
        help='Inline JSON observation, e.g. \'{"high": 28, "low": 20, "feel": 28, '
        '"date": "2024-07-01"}\'.',
    )
    parser.add_argument(
        "--tomorrow",
        default=None,
        help="Inline JSON observation for the following day.",
    )
    parser.add_argument(
        "--input-file",
        type=Path,
        default=None,
        help="JSON file with one {today, tomorrow} object or a list of them.",
    )
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Show the deciding rule and every other rule that also matched.",
    )
    parser.add_argument(
        "--list-rules",
        action="store_true",
        help="Print the ordered rule table and exit.",
    )
    parser.add_argument(
        "--no-journal",
        action="store_true",
        help="Do not write journal events for this run.",
    )
    return parser.parse_args()


def _load_json_text(text: str, *, source: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InputFileError(f"{source} is not valid JSON: {exc}") from exc


def _load_payload_from_file(input_file: Path) -> Any:
    if not input_file.exists():
        raise InputFileError(f"Input file does not exist: {input_file}")
    try:
        text = input_file.read_text(encoding="utf-8")
    except OSError as exc:
        raise InputFileError(f"Failed reading input file {input_file}: {exc}") from exc
    return _load_json_text(text, source=str(input_file))


def _extract_pairs(payload: Any) -> list[dict[str, Any]]:
    if isinstance(payload, dict) and isinstance(payload.get("pairs"), list):
        records = payload["pairs"]
    elif isinstance(payload, dict):
        records = [payload]
    elif isinstance(payload, list):
        records = payload
    else:
        raise InputFileError(
            f"Input payload must be an object or list, got {type(payload).__name__}."
        )

    pairs: list[dict[str, Any]] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict) or "today" not in record or "tomorrow" not in record:
            raise InputFileError(
                f"Pair #{index + 1} must be an object with 'today' and 'tomorrow' keys."
            )
        pairs.append(record)
    return pairs


def _format_observation(observation: WeatherObservation) -> str:
    return (
        f"{observation.date} H{observation.high} L{observation.low} F{observation.feel}"
    )


def _print_rules(console: Console) -> None:
    table = Table(title="Weather Change Rules (first match wins)")
    table.add_column("#", justify="right")
    table.add_column("Code")
    table.add_column("Label")
    table.add_column("Label (zh)")
    table.add_column("Condition", overflow="fold")
    for rule in RULES:
        table.add_row(str(rule.number), rule.code, rule.label, rule.label_zh, rule.condition)
    table.add_row("-", DEFAULT_CODE, DEFAULT_LABEL, DEFAULT_LABEL_ZH, "no rule matched")
    console.print(table)


def _print_results(
    console: Console,
    results: list[tuple[WeatherObservation, WeatherObservation, RuleMatch, list[int]]],
    *,
    explain: bool,
    max_print: int,
) -> None:
    table = Table(title="Weather Change")
    table.add_column("Today")
    table.add_column("Tomorrow")
    table.add_column("Label")
    if explain:
        table.add_column("Rule", justify="right")
        table.add_column("Also matched", overflow="fold")

    for today, tomorrow, match, matched_numbers in results[:max_print]:
        row = [_format_observation(today), _format_observation(tomorrow), match.label]
        if explain:
            others = [str(number) for number in matched_numbers if number != match.number]
            row.append("-" if match.is_default else str(match.number))
            row.append(", ".join(others) or "-")
        table.add_row(*row)
    console.print(table)
    if len(results) > max_print:
        console.print(f"... {len(results) - max_print} more not shown")


def main() -> int:
    """Run the weather-change classification flow."""
    args = parse_args()
    console = Console()

    if args.list_rules:
        _print_rules(console)
        return 0

    logger = setup_logger()
    inline = args.today is not None or args.tomorrow is not None
    if inline and args.input_file is not None:
        logger.error("Use either --today/--tomorrow or --input-file, not both.")
        return 2
    if inline and (args.today is None or args.tomorrow is None):
        logger.error("--today and --tomorrow must be given together.")
        return 2
    if not inline and args.input_file is None:
        logger.error("Provide --today/--tomorrow or --input-file.")
        return 2

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2
    logger.setLevel(settings.log_level)

    session_id = uuid.uuid4().hex[:12]
    journal: JournalWriter | None = None
    if settings.journal_enabled and not args.no_journal:
        try:
            journal = JournalWriter(journal_dir=settings.journal_dir, session_id=session_id)
            journal.write_event(
                "classify_start",
                payload={
                    "source_mode": "file" if args.input_file else "inline",
                    "input_file": str(args.input_file) if args.input_file else None,
                    "explain": args.explain,
                    "config": settings.safe_summary(),
                },
                metadata={"session_id": session_id},
            )
        except JournalError as exc:
            logger.error("Failed to initialize journal: %s", exc)
            return 3

    exit_code = 0
    try:
        if args.input_file is not None:
            pairs = _extract_pairs(_load_payload_from_file(args.input_file))
        else:
            pairs = [
                {
                    "today": _load_json_text(args.today, source="--today"),
                    "tomorrow": _load_json_text(args.tomorrow, source="--tomorrow"),
                }
            ]

        classifier = WeatherChangeClassifier(logger=logger.getChild("classifier"))
        results: list[tuple[WeatherObservation, WeatherObservation, RuleMatch, list[int]]] = []
        for pair in pairs:
            today = parse_observation(pair["today"], field="today")
            tomorrow = parse_observation(pair["tomorrow"], field="tomorrow")
            match = classifier.explain(today, tomorrow)
            matched_numbers = (
                [rule.number for rule in classifier.matching_rules(today, tomorrow)]
                if args.explain
                else []
            )
            results.append((today, tomorrow, match, matched_numbers))
            if journal is not None:
                journal.write_event(
                    "classify_result",
                    payload={
                        "today": today.model_dump(mode="json"),
                        "tomorrow": tomorrow.model_dump(mode="json"),
                        "match": match.model_dump(mode="json"),
                    },
                    metadata={"session_id": session_id},
                )

        _print_results(
            console,
            results,
            explain=args.explain,
            max_print=settings.cli_max_print,
        )
        console.print(f"classified={len(results)}")
        logger.info(
            "Classified %d weather pair(s).", len(results), extra={"pair_count": len(results)}
        )
    except (InputFileError, WeatherChangeError, JournalError) as exc:
        exit_code = 4
        logger.error("Weather change classification failure: %s", exc)
        if journal is not None:
            try:
                journal.write_event(
                    "classify_failure",
                    payload={"error": str(exc), "type": type(exc).__name__},
                    metadata={"session_id": session_id},
                )
            except JournalError:
                logger.error("Failed to journal classify_failure.")
    finally:
        if journal is not None:
            try:
                journal.write_event(
                    "classify_shutdown",
                    payload={"exit_code": exit_code},
                    metadata={"session_id": session_id},
                )
            except JournalError:
                logger.error("Failed to write classify_shutdown event.")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
