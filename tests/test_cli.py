"""
Tests for the screening CLI.
"""

import json
from datetime import date

import pytest
from rich.console import Console

from mronj_screening.interfaces.cli.main import ScreeningCLI, build_parser, main


@pytest.fixture
def intake_file(tmp_path):
    path = tmp_path / "intake.json"
    path.write_text(json.dumps({
        "name": "王小明",
        "hasAntiresorptiveMed": True,
        "drugName": "保骼麗注射液Prolia",
        "startYear": "2023",
        "startMonth": "1",
        "systemicDiseases": ["高血壓"],
    }, ensure_ascii=False), encoding="utf-8")
    return path


def _cli(language="en"):
    console = Console(record=True, width=200)
    return ScreeningCLI(language=language, console=console), console


def test_run_prints_report(intake_file):
    cli, console = _cli()
    status = cli.run(str(intake_file), today=date(2024, 6, 1))
    output = console.export_text()

    assert status == 0
    assert "MRONJ Risk Assessment Report" in output
    assert "王小明" in output
    assert "18 months" in output
    assert "Moderate risk" in output
    assert "注射" in output


def test_run_chinese_labels(intake_file):
    cli, console = _cli("zh-TW")
    assert cli.run(str(intake_file), today=date(2024, 6, 1)) == 0
    assert "中度風險" in console.export_text()


def test_run_missing_file(tmp_path):
    cli, console = _cli()
    assert cli.run(str(tmp_path / "missing.json")) == 1
    assert "Error" in console.export_text()


def test_run_incomplete_medication(tmp_path):
    path = tmp_path / "intake.json"
    path.write_text(json.dumps({"hasAntiresorptiveMed": True}), encoding="utf-8")
    cli, console = _cli()
    assert cli.run(str(path)) == 1


def test_parser_today_argument():
    args = build_parser().parse_args(["intake.json", "--today", "2024-02-29", "--lang", "en"])
    assert args.today == date(2024, 2, 29)
    assert args.lang == "en"


def test_parser_rejects_bad_date():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["intake.json", "--today", "29/02/2024"])


def test_main_exit_status(intake_file):
    with pytest.raises(SystemExit) as exc:
        main([str(intake_file), "--today", "2024-06-01", "--lang", "en"])
    assert exc.value.code == 0


def test_bracketed_text_printed_literally(tmp_path):
    path = tmp_path / "intake.json"
    path.write_text(json.dumps({
        "name": "Lee [/]",
        "hasRadiotherapy": True,
        "radiotherapyDetails": "[left mandible] 60Gy",
        "hasCancer": True,
        "cancerHistory": "[bold]oral SCC",
        "hasAntiresorptiveMed": True,
        "drugName": "[red]Fosamax",
        "startYear": "2023",
        "startMonth": "1",
    }), encoding="utf-8")

    cli, console = _cli()
    status = cli.run(str(path), today=date(2024, 6, 1))
    output = console.export_text()

    assert status == 0
    assert "Lee [/]" in output
    assert "[left mandible] 60Gy" in output
    assert "[bold]oral SCC" in output
    assert "[red]Fosamax" in output
