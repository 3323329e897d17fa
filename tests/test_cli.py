from __future__ import annotations

import pyarrow.parquet as pq
import pytest
from typer.testing import CliRunner

from srsglass import logs
from srsglass.cli import app
from tests.dump_factory import region_xml

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_log_files(monkeypatch):
    monkeypatch.setattr(logs, "reconfigure", lambda *a, **k: None)
    monkeypatch.delenv("SRSGLASS_NATION", raising=False)


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_run_with_existing_dump(write_dump, tmp_path):
    dump = write_dump(region_xml("A", 10), region_xml("B", 20), region_xml("C", 70))
    out = tmp_path / "sheet.parquet"

    result = runner.invoke(
        app,
        [
            "run",
            "-n", "Testlandia",
            "-d",
            "-p", str(dump),
            "-o", str(out),
            "--major", "100",
            "--minor", "50",
        ],
    )

    assert result.exit_code == 0, result.output
    assert pq.read_table(out).column("Major").to_pylist() == ["0:00:00", "0:00:10", "0:00:30"]


def test_run_reports_format_error(write_dump, tmp_path):
    dump = write_dump(region_xml("A", 10), region_xml("B", None))
    out = tmp_path / "sheet.xlsx"

    result = runner.invoke(app, ["run", "-n", "Testlandia", "-d", "-p", str(dump), "-o", str(out)])

    assert result.exit_code == 1
    assert "FormatError" in result.output
    assert not out.exists()


def test_run_requires_nation(write_dump):
    dump = write_dump(region_xml("A", 1))

    result = runner.invoke(app, ["run", "-d", "-p", str(dump)])

    assert result.exit_code == 1
    assert "UserInputError" in result.output
    assert "Running srsglass" not in result.output


def test_run_rejects_non_positive_length(write_dump):
    dump = write_dump(region_xml("A", 1))

    result = runner.invoke(app, ["run", "-n", "Testlandia", "-d", "-p", str(dump), "--major", "0"])

    assert result.exit_code == 1
    assert "UserInputError" in result.output


def test_schedule_prints_table(write_dump):
    dump = write_dump(region_xml("Alpha", 10), region_xml("Beta", 90))

    result = runner.invoke(app, ["schedule", str(dump), "--major", "100", "--minor", "10"])

    assert result.exit_code == 0, result.output
    assert "Alpha" in result.output
    assert "Beta" in result.output
    assert "0:00:10" in result.output


def test_blank_nation_is_rejected_before_running(write_dump):
    dump = write_dump(region_xml("A", 1))

    result = runner.invoke(app, ["run", "-n", "   ", "-d", "-p", str(dump)])

    assert result.exit_code == 1
    assert "UserInputError" in result.output
    assert "Running srsglass" not in result.output


def test_missing_config_file_is_reported(write_dump, tmp_path):
    dump = write_dump(region_xml("A", 1))

    result = runner.invoke(app, ["schedule", str(dump), "--config", str(tmp_path / "nope.yml")])

    assert result.exit_code == 1
    assert "UserInputError" in result.output


@pytest.mark.parametrize(
    "content",
    [
        "update: [unclosed",
        "update:\n  major_length: -5\n",
    ],
)
def test_bad_config_file_is_reported(write_dump, tmp_path, content):
    dump = write_dump(region_xml("A", 1))
    bad = tmp_path / "bad.yml"
    bad.write_text(content, encoding="utf-8")

    result = runner.invoke(app, ["run", "-n", "Testlandia", "-d", "-p", str(dump), "--config", str(bad)])

    assert result.exit_code == 1
    assert "UserInputError" in result.output
