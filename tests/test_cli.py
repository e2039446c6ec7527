"""Offline smoke tests for the weather-change CLI."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest

from weather_change.cli import _extract_pairs
from weather_change.cli import main as cli_main
from weather_change.exceptions import InputFileError

TODAY = {"high": 28, "low": 20, "feel": 28, "date": "2024-07-01"}
TOMORROW = {"high": 35, "low": 22, "feel": 33, "date": "2024-07-02"}


def _set_env(monkeypatch: Any, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("COLUMNS", "200")
    monkeypatch.setenv("JOURNAL_DIR", str(tmp_path / "journal"))
    monkeypatch.setenv("JOURNAL_ENABLED", "true")


def _event_types(tmp_path: Path) -> list[str]:
    journal_files = list((tmp_path / "journal").glob("*.jsonl"))
    assert journal_files
    lines = journal_files[0].read_text(encoding="utf-8").strip().splitlines()
    return [json.loads(line)["event_type"] for line in lines]


def test_inline_pair_prints_label_and_journals(
    monkeypatch: Any, tmp_path: Path, capsys: Any
) -> None:
    _set_env(monkeypatch, tmp_path)
    monkeypatch.setattr(
        sys,
        "argv",
        ["weather-change", "--today", json.dumps(TODAY), "--tomorrow", json.dumps(TOMORROW)],
    )

    assert cli_main() == 0
    output = capsys.readouterr().out
    assert "turning hotter" in output
    assert "classified=1" in output
    assert _event_types(tmp_path) == ["classify_start", "classify_result", "classify_shutdown"]


def test_input_file_batch_with_explain(monkeypatch: Any, tmp_path: Path, capsys: Any) -> None:
    _set_env(monkeypatch, tmp_path)
    cold_today = {"high": 5, "low": 0, "feel": 3, "date": "2024-01-10"}
    cold_tomorrow = {"high": 6, "low": 1, "feel": 4, "date": "2024-01-11"}
    input_file = tmp_path / "pairs.json"
    input_file.write_text(
        json.dumps(
            {
                "pairs": [
                    {"today": TODAY, "tomorrow": TOMORROW},
                    {"today": cold_today, "tomorrow": cold_tomorrow},
                ]
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setattr(
        sys, "argv", ["weather-change", "--input-file", str(input_file), "--explain"]
    )

    assert cli_main() == 0
    output = capsys.readouterr().out
    assert "turning hotter" in output
    assert "very cold" in output
    assert "Also matched" in output
    assert "classified=2" in output
    assert _event_types(tmp_path).count("classify_result") == 2


def test_bad_date_exits_with_failure(monkeypatch: Any, tmp_path: Path) -> None:
    _set_env(monkeypatch, tmp_path)
    bad_tomorrow = dict(TOMORROW, date="2024-13-40")
    monkeypatch.setattr(
        sys,
        "argv",
        ["weather-change", "--today", json.dumps(TODAY), "--tomorrow", json.dumps(bad_tomorrow)],
    )

    assert cli_main() == 4
    event_types = _event_types(tmp_path)
    assert "classify_failure" in event_types
    assert "classify_result" not in event_types
    assert event_types[-1] == "classify_shutdown"


def test_invalid_inline_json_exits_with_failure(monkeypatch: Any, tmp_path: Path) -> None:
    _set_env(monkeypatch, tmp_path)
    monkeypatch.setattr(
        sys, "argv", ["weather-change", "--today", "{high:", "--tomorrow", json.dumps(TOMORROW)]
    )
    assert cli_main() == 4


def test_missing_input_file_exits_with_failure(monkeypatch: Any, tmp_path: Path) -> None:
    _set_env(monkeypatch, tmp_path)
    monkeypatch.setattr(
        sys, "argv", ["weather-change", "--input-file", str(tmp_path / "missing.json")]
    )
    assert cli_main() == 4


def test_pair_without_tomorrow_is_rejected(monkeypatch: Any, tmp_path: Path) -> None:
    _set_env(monkeypatch, tmp_path)
    input_file = tmp_path / "pairs.json"
    input_file.write_text(json.dumps([{"today": TODAY}]), encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["weather-change", "--input-file", str(input_file)])
    assert cli_main() == 4


def test_today_without_tomorrow_is_argument_error(monkeypatch: Any, tmp_path: Path) -> None:
    _set_env(monkeypatch, tmp_path)
    monkeypatch.setattr(sys, "argv", ["weather-change", "--today", json.dumps(TODAY)])
    assert cli_main() == 2


def test_no_input_is_argument_error(monkeypatch: Any, tmp_path: Path) -> None:
    _set_env(monkeypatch, tmp_path)
    monkeypatch.setattr(sys, "argv", ["weather-change"])
    assert cli_main() == 2


def test_no_journal_flag_skips_journal(monkeypatch: Any, tmp_path: Path, capsys: Any) -> None:
    _set_env(monkeypatch, tmp_path)
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "weather-change",
            "--today",
            json.dumps(TODAY),
            "--tomorrow",
            json.dumps(TOMORROW),
            "--no-journal",
        ],
    )
    assert cli_main() == 0
    assert "turning hotter" in capsys.readouterr().out
    assert not list((tmp_path / "journal").glob("*.jsonl"))


def test_invalid_config_is_argument_error(monkeypatch: Any, tmp_path: Path) -> None:
    _set_env(monkeypatch, tmp_path)
    monkeypatch.setenv("CLI_MAX_PRINT", "0")
    monkeypatch.setattr(
        sys,
        "argv",
        ["weather-change", "--today", json.dumps(TODAY), "--tomorrow", json.dumps(TOMORROW)],
    )
    assert cli_main() == 2


def test_list_rules_prints_table(monkeypatch: Any, tmp_path: Path, capsys: Any) -> None:
    _set_env(monkeypatch, tmp_path)
    monkeypatch.setattr(sys, "argv", ["weather-change", "--list-rules"])

    assert cli_main() == 0
    output = capsys.readouterr().out
    assert "turning_colder" in output
    assert "sudden_drop" in output
    assert "little_change" in output


def test_extract_pairs_rejects_scalar_payload() -> None:
    with pytest.raises(InputFileError):
        _extract_pairs(42)


def test_extract_pairs_accepts_single_object_and_pairs_key() -> None:
    pair = {"today": TODAY, "tomorrow": TOMORROW}
    assert _extract_pairs(pair) == [pair]
    assert _extract_pairs({"pairs": [pair, pair]}) == [pair, pair]
