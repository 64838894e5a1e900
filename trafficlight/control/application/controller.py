"""
Timed state machine of a four-approach intersection.
"""
import logging
import threading
from typing import Dict, List, Optional

from ..domain.entities import Direction, HeadId, IntersectionState, Phase, SignalTimings
from ..domain.protocols import PhaseDisplay, Scheduler, StateListener, TimerHandle
from ..domain.signal_head import SignalHead
from ...common.exceptions import ControllerClosedError
from ...common.logging import log_command

logger = logging.getLogger(__name__)


class IntersectionController:
    """
    Owns the phase, the active direction and every scheduled transition.

    The active pair shows the controller phase, the other pair is held at red.
    Manual commands and timer callbacks are serialized by one re-entrant lock.
    Each callback carries the token it was armed with and does nothing once that
    token has been revoked, so a cancelled timer that already fired is harmless.

    Manual commands stop a running automatic cycle before they act.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        display: Optional[PhaseDisplay] = None,
        timings: Optional[SignalTimings] = None,
        intersection_id: str = "INT-001"
    ):
        self.intersection_id = intersection_id
        self.scheduler = scheduler
        self.timings = timings or SignalTimings()
        self.heads: Dict[HeadId, SignalHead] = {head: SignalHead(head, display) for head in HeadId}

        self._lock = threading.RLock()
        self._phase = Phase.GREEN
        self._direction = Direction.NORTH_SOUTH

        self._yellow_timer: Optional[TimerHandle] = None
        self._yellow_token = 0
        self._cycle_timer: Optional[TimerHandle] = None
        self._cycle_token = 0
        self._auto_active = False

        self._closed = False
        self._listeners: List[StateListener] = []

        with self._lock:
            self._render()

    # Queries

    def get_phase(self) -> Phase:
        with self._lock:
            return self._phase

    def get_state(self) -> IntersectionState:
        with self._lock:
            return self._snapshot()

    @property
    def active_direction(self) -> Direction:
        with self._lock:
            return self._direction

    @property
    def is_auto_mode(self) -> bool:
        with self._lock:
            return self._auto_active

    @property
    def closed(self) -> bool:
        return self._closed

    def add_listener(self, listener: StateListener):
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: StateListener):
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    # Manual commands

    @log_command(logger)
    def change_to_green(self):
        with self._lock:
            self._ensure_open()
            self._manual_override("change_to_green")
            self._enter_green()

    @log_command(logger)
    def change_to_yellow(self):
        with self._lock:
            self._ensure_open()
            self._manual_override("change_to_yellow")
            self._enter_yellow(arm_expiry=True)

    @log_command(logger)
    def change_to_red(self):
        with self._lock:
            self._ensure_open()
            self._manual_override("change_to_red")
            self._handover()

    @log_command(logger)
    def next_state(self):
        """Green -> Yellow -> Red -> Green."""
        with self._lock:
            self._ensure_open()
            if self._phase is Phase.GREEN:
                self.change_to_yellow()
            elif self._phase is Phase.YELLOW:
                self.change_to_red()
            else:
                self.change_to_green()

    @log_command(logger)
    def start_auto_mode(self):
        with self._lock:
            self._ensure_open()
            if self._auto_active:
                self._stop_auto_cycle()
            self._auto_active = True
            logger.info(f"[{self.intersection_id}] Auto mode started")
            self._run_auto_cycle()

    @log_command(logger)
    def stop_auto_mode(self):
        with self._lock:
            self._stop_auto_cycle()
            logger.info(f"[{self.intersection_id}] Auto mode stopped")

    def close(self):
        """Stops every timer; the controller accepts no further commands."""
        with self._lock:
            if self._closed:
                return
            self._stop_auto_cycle()
            self._closed = True
            logger.info(f"[{self.intersection_id}] Controller closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # Transitions (lock held)

    def _enter_green(self):
        self._cancel_yellow_timer()
        self._phase = Phase.GREEN
        self._render()
        logger.info(f"{self._direction.label} lights switched to green")

    def _enter_yellow(self, arm_expiry: bool):
        self._cancel_yellow_timer()
        self._phase = Phase.YELLOW
        if arm_expiry:
            self._arm_yellow_timer()
        self._render()
        logger.info(
            f"{self._direction.label} lights switched to yellow "
            f"(red in {self.timings.yellow_seconds:g}s)"
        )

    def _handover(self):
        self._cancel_yellow_timer()
        outgoing = self._direction
        self._direction = outgoing.opposite
        self._phase = Phase.GREEN
        self._render()
        logger.info(
            f"{outgoing.label} lights switched to red, "
            f"{self._direction.label} lights switched to green"
        )

    def _render(self):
        # Inactive pair first: a handover never shows both pairs non-red
        for head in self._direction.opposite.heads:
            self.heads[head].set_phase(Phase.RED)
        for head in self._direction.heads:
            self.heads[head].set_phase(self._phase)
        self._notify(self._snapshot())

    def _snapshot(self) -> IntersectionState:
        return IntersectionState(
            phase=self._phase,
            active_direction=self._direction,
            heads={head_id: head.get_phase() for head_id, head in self.heads.items()},
            auto_mode=self._auto_active,
            yellow_pending=self._yellow_timer is not None
        )

    def _notify(self, state: IntersectionState):
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error(f"State listener failed: {e}", exc_info=True)

    def _ensure_open(self):
        if self._closed:
            raise ControllerClosedError(f"Controller {self.intersection_id} is closed")

    def _manual_override(self, command: str):
        if self._auto_active:
            self._stop_auto_cycle()
            logger.info(f"Manual {command} overrides the automatic cycle; auto mode stopped")

    # Yellow expiry

    def _arm_yellow_timer(self):
        self._yellow_token += 1
        token = self._yellow_token
        self._yellow_timer = self.scheduler.schedule(
            self.timings.yellow_seconds,
            lambda: self._on_yellow_expired(token)
        )

    def _cancel_yellow_timer(self):
        self._yellow_token += 1
        if self._yellow_timer is not None:
            self._yellow_timer.cancel()
            self._yellow_timer = None

    def _on_yellow_expired(self, token: int):
        with self._lock:
            if self._closed or token != self._yellow_token:
                logger.debug("Ignoring stale yellow expiry")
                return
            self._yellow_timer = None
            self._handover()

    # Automatic cycle: green -> (green_seconds) -> yellow -> (yellow_seconds) -> handover -> ...

    def _run_auto_cycle(self):
        self._enter_green()
        self._schedule_cycle_step(self.timings.green_seconds)

    def _schedule_cycle_step(self, delay_seconds: float):
        token = self._cycle_token
        self._cycle_timer = self.scheduler.schedule(
            delay_seconds,
            lambda: self._on_cycle_step(token)
        )

    def _on_cycle_step(self, token: int):
        with self._lock:
            if self._closed or not self._auto_active or token != self._cycle_token:
                logger.debug("Ignoring stale auto-cycle step")
                return
            self._cycle_timer = None
            if self._phase is Phase.GREEN:
                # The cycle owns the yellow expiry, no separate timer
                self._enter_yellow(arm_expiry=False)
                self._schedule_cycle_step(self.timings.yellow_seconds)
            else:
                self._handover()
                self._schedule_cycle_step(self.timings.green_seconds)

    def _stop_auto_cycle(self):
        self._auto_active = False
        self._cycle_token += 1
        if self._cycle_timer is not None:
            self._cycle_timer.cancel()
            self._cycle_timer = None
        self._cancel_yellow_timer()
