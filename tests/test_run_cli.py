"""Tests for the ``run.py`` command line."""

from __future__ import annotations

from pathlib import Path

import pytest

import run


def test_runs_program_and_exits_zero(programs_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    status = run.main([str(programs_dir / "mult.ls8"), "--tick-interval", "0.0001"])

    assert status == 0
    assert capsys.readouterr().out == "72\n"


def test_fault_exits_one_and_dumps_trace(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "bad.ls8"
    path.write_text("00000000\n11111111\n", encoding="utf-8")

    status = run.main([str(path), "--tick-interval", "0.0001", "--trace", "4"])

    err = capsys.readouterr().err
    assert status == 1
    assert "Invalid instruction at address 0x01: 11111111" in err
    assert "NOP" in err
    assert "flags=HALT,fault" in err


def test_missing_program_is_a_usage_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run.main([str(tmp_path / "missing.ls8")])

    assert excinfo.value.code == 2


def test_malformed_program_is_a_usage_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "bad.ls8"
    path.write_text("LDI R0,8\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        run.main([str(path)])

    assert excinfo.value.code == 2
    assert "line 1" in capsys.readouterr().err


def test_non_positive_interval_is_rejected(programs_dir: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run.main([str(programs_dir / "print8.ls8"), "--timer-interval", "0"])

    assert excinfo.value.code == 2
