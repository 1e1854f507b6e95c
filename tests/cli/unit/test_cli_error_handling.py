"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from feature_orchestrator.cli import main


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["run", "--feature", "demo.feature"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--config" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["run", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option: --bogus" in captured.err
    assert "Traceback" not in captured.err


def test_missing_configuration_file_returns_cli_error(tmp_path: Path, capsys) -> None:
    exit_code = main(["versions", "--config", str(tmp_path / "absent.yaml")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Configuration file not found" in captured.err
    assert "Traceback" not in captured.err


def test_zero_threads_is_rejected_by_option_parsing(tmp_path: Path, capsys) -> None:
    exit_code = main(
        [
            "run",
            "--config",
            str(tmp_path / "config.yaml"),
            "--feature",
            str(tmp_path / "demo.feature"),
            "--threads",
            "0",
        ]
    )
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "--threads" in captured.err
