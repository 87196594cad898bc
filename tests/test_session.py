from __future__ import annotations

import math
from pathlib import Path

import pytest

from pidarm.control.session import format_report, hold_keys, run_session
from pidarm.main import main
from pidarm.presets import three_link_arm

DT = 1.0 / 60.0
REPO_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "three_link.yaml"


def test_hold_keys_windows() -> None:
    keys = hold_keys(up=(0, 3), down=(3, 5), reset_at=9)
    assert keys(0) == (True, False, False)
    assert keys(3) == (False, True, False)
    assert keys(5) == (False, False, False)
    assert keys(9) == (False, False, True)


def test_session_reports_targets_and_effector() -> None:
    reports = list(run_session(three_link_arm(), 90, DT, hold_keys(up=(0, 90))))
    assert len(reports) == 90
    assert reports[0].targets == [1.0, 1.0, 1.0]
    assert reports[-1].targets == [90.0, 90.0, 90.0]
    assert reports[-1].end_effector is not None
    assert all(round(v, 2) == v for v in reports[-1].end_effector)


def test_session_reset_and_settle() -> None:
    commands = hold_keys(up=(0, 45), reset_at=60)
    reports = list(run_session(three_link_arm(), 1200, DT, commands))
    assert reports[59].targets == [45.0, 45.0, 45.0]
    assert reports[60].targets == [0.0, 0.0, 0.0]
    assert reports[-1].end_effector == [0.6, 4.5, 0.0]
    assert reports[-1].max_error_deg < 0.5


def test_format_report() -> None:
    (report,) = run_session(three_link_arm(), 1, DT, hold_keys(up=(0, 1)))
    text = format_report(report)
    assert text.startswith("joints: [0]: 1 [1]: 1 [2]: 1 ")
    assert "\nend_effector: [" in text


def test_cli_chain(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["chain"]) == 0
    out = capsys.readouterr().out
    assert "end_effector: [0.6, 4.5, 0.0]" in out
    assert "elbow2" in out


def test_cli_simulate_with_config(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["simulate", "--config", str(REPO_CONFIG), "--ticks", "30", "--hold-up", "10", "--every", "0"]) == 0
    out = capsys.readouterr().out
    assert "final:" in out
    assert "[0]: 10 " in out


def test_cli_simulate_rejects_bad_dt() -> None:
    with pytest.raises(SystemExit):
        main(["simulate", "--dt", "0"])


def test_cli_rotation(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["rotation", "--axis", "1", "0", "0", "--angle", "90", "--compare"]) == 0
    out = capsys.readouterr().out
    assert "angle (deg): 90.000000" in out
    assert "difference (deg): 0.000000" in out
    assert main(["rotation", "--symbolic"]) == 0


def test_report_error_is_measured_after_the_tick() -> None:
    chain = three_link_arm()
    (report,) = run_session(chain, 1, DT, hold_keys(up=(0, 1)))
    # the target moved to 1 degree; one tick of control already closes part of it
    assert 0.0 < report.max_error_deg < 1.0
    assert report.max_error_deg == pytest.approx(math.degrees(max(chain.tracking_errors())))


def test_cli_log_level_choices(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--log-level", "debug", "chain"]) == 0
    with pytest.raises(SystemExit):
        main(["--log-level", "verbose", "chain"])
    assert "invalid choice" in capsys.readouterr().err
