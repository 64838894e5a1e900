import io

import pytest
from trafficlight.control.domain.entities import Direction, Phase
from trafficlight.control.presentation.console import ConsoleCommandShell

@pytest.fixture
def output():
    return io.StringIO()

@pytest.fixture
def shell(controller, board, output):
    return ConsoleCommandShell(controller, board, stdin=io.StringIO(), stdout=output)

def test_next_command_prints_board(shell, controller, output):
    assert shell.execute("next")
    assert controller.get_phase() is Phase.YELLOW
    assert "N[Y] S[Y] E[R] W[R]" in output.getvalue()

def test_commands_are_case_insensitive(shell, controller):
    shell.execute("  RED ")
    assert controller.active_direction is Direction.EAST_WEST

def test_auto_and_stop(shell, controller, output):
    shell.execute("auto")
    assert controller.is_auto_mode
    assert output.getvalue().rstrip().endswith("(auto)")

    shell.execute("stop")
    assert not controller.is_auto_mode

def test_unknown_command_keeps_running(shell, output):
    assert shell.execute("blue")
    assert "Unknown command: 'blue'" in output.getvalue()

def test_blank_line_is_ignored(shell, output):
    assert shell.execute("\n")
    assert output.getvalue() == ""

def test_quit(shell):
    assert not shell.execute("quit")
    assert not shell.execute("exit")

def test_errors_are_reported(shell, controller, output):
    controller.close()
    assert shell.execute("green")
    assert "Error: Controller INT-001 is closed" in output.getvalue()

def test_run_stops_at_quit(controller, board, output):
    stdin = io.StringIO("next\nstate\nquit\nnext\n")
    ConsoleCommandShell(controller, board, stdin=stdin, stdout=output).run()

    # The command after quit is never executed
    assert controller.get_phase() is Phase.YELLOW
    text = output.getvalue()
    assert "console loaded" in text
    assert "Available commands" in text
