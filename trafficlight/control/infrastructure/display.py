"""
Display adapters: turn a head's phase into a visible indicator.
"""
import logging
import threading
from typing import Dict

from ..domain.entities import HeadId, Phase

logger = logging.getLogger(__name__)

LAMP_ORDER = (Phase.RED, Phase.YELLOW, Phase.GREEN)


class LoggingDisplay:
    """Writes every head update to the log."""

    def show(self, head_id: HeadId, phase: Phase):
        logger.debug(f"{head_id.value} head -> {phase.name}")


class LampBoardDisplay:
    """
    Keeps the lamps of every head: one lit lamp per head, the others off.
    """

    def __init__(self):
        self._lamps: Dict[HeadId, Dict[Phase, bool]] = {
            head: {lamp: lamp is Phase.RED for lamp in LAMP_ORDER} for head in HeadId
        }
        self._lock = threading.Lock()

    def show(self, head_id: HeadId, phase: Phase):
        with self._lock:
            lamps = self._lamps[head_id]
            for lamp in LAMP_ORDER:
                lamps[lamp] = False
            lamps[phase] = True

    def lit(self, head_id: HeadId) -> Phase:
        with self._lock:
            return next(lamp for lamp, on in self._lamps[head_id].items() if on)

    def render_board(self) -> str:
        """One line per intersection, e.g. N[G] S[G] E[R] W[R]."""
        return " ".join(
            f"{head.value[0].upper()}[{self.lit(head).name[0]}]" for head in HeadId
        )
