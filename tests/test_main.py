from pathlib import Path

from trafficlight.main import main

CONF_DIR = str(Path(__file__).resolve().parents[1] / "conf")

def test_simulate_prints_one_cycle(capsys):
    assert main(["simulate", "--config-dir", CONF_DIR]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 5
    assert "north-south GREEN" in lines[0]
    assert lines[2].startswith("[   13.0s] east-west GREEN")

def test_simulate_with_overrides(capsys):
    assert main(["simulate", "--config-dir", CONF_DIR, "--seconds", "6", "timings.green_seconds=2", "timings.yellow_seconds=1"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert [line[:10] for line in lines] == ["[    0.0s]", "[    2.0s]", "[    3.0s]", "[    5.0s]", "[    6.0s]"]

def test_unknown_profile_exits_with_error(capsys):
    assert main(["simulate", "--config-dir", CONF_DIR, "--profile", "missing"]) == 2
    assert "Configuration error" in capsys.readouterr().err
