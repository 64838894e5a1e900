"""
Interactive console for driving the intersection by hand.
"""
import sys
from typing import Callable, Dict, Optional, TextIO

from ..application.controller import IntersectionController
from ..infrastructure.display import LampBoardDisplay
from ...common.exceptions import ControlError

HELP_TEXT = """Available commands:
  green   - switch the active direction to green
  yellow  - switch to yellow (red after the yellow time)
  red     - switch to red, the other direction turns green
  next    - advance to the next phase
  auto    - start auto mode
  stop    - stop auto mode
  state   - print the current state
  help    - print this help
  quit    - leave the console"""


class ConsoleCommandShell:
    """
    Reads one command per line and applies it to the controller.
    """

    def __init__(
        self,
        controller: IntersectionController,
        board: Optional[LampBoardDisplay] = None,
        stdin: TextIO = sys.stdin,
        stdout: TextIO = sys.stdout
    ):
        self.controller = controller
        self.board = board
        self.stdin = stdin
        self.stdout = stdout
        self.commands: Dict[str, Callable[[], None]] = {
            "green": controller.change_to_green,
            "yellow": controller.change_to_yellow,
            "red": controller.change_to_red,
            "next": controller.next_state,
            "auto": controller.start_auto_mode,
            "stop": controller.stop_auto_mode,
        }

    def _print(self, text: str):
        self.stdout.write(text + "\n")
        self.stdout.flush()

    def print_state(self):
        state = self.controller.get_state()
        line = state.describe()
        if self.board is not None:
            line = f"{self.board.render_board()}  {line}"
        if state.auto_mode:
            line += " (auto)"
        self._print(line)

    def execute(self, line: str) -> bool:
        """Runs one command. Returns False when the shell should exit."""
        command = line.strip().lower()
        if not command:
            return True
        if command in ("quit", "exit"):
            return False
        if command == "help":
            self._print(HELP_TEXT)
            return True
        if command == "state":
            self.print_state()
            return True

        action = self.commands.get(command)
        if action is None:
            self._print(f"Unknown command: {command!r} (type 'help')")
            return True

        try:
            action()
        except ControlError as e:
            self._print(f"Error: {e}")
            return True
        self.print_state()
        return True

    def run(self):
        self._print(f"Intersection {self.controller.intersection_id} console loaded.")
        self._print(HELP_TEXT)
        self.print_state()
        for line in self.stdin:
            if not self.execute(line):
                break
