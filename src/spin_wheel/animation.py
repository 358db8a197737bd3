"""
Spin animation as an explicit state machine.

The pure functions `start_spin` and `step` carry all of the timing logic;
`AnimationDriver` only adds callbacks and re-entrancy bookkeeping, and
`run_frames` is the cooperative frame loop that feeds it timestamps.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional, Tuple

log = logging.getLogger(__name__)


class Phase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    SETTLED = "settled"


@dataclass(frozen=True)
class SpinState:
    phase: Phase = Phase.IDLE
    rotation: float = 0.0
    final_rotation: float = 0.0
    duration_ms: float = 0.0
    start_ts: Optional[float] = None


def ease_out_cubic(progress: float) -> float:
    return 1 - (1 - progress) ** 3


def start_spin(state: SpinState, final_rotation: float, duration_ms: float) -> SpinState:
    """Enter RUNNING. A request while already running returns `state` unchanged."""
    if state.phase is Phase.RUNNING:
        return state
    return SpinState(
        phase=Phase.RUNNING,
        rotation=state.rotation,
        final_rotation=final_rotation,
        duration_ms=duration_ms,
        start_ts=None,
    )


def step(state: SpinState, timestamp_ms: float) -> Tuple[SpinState, float, bool]:
    """
    Advance a running spin to `timestamp_ms`.

    Returns (new_state, rotation, completed). `completed` is True only on the
    tick that moves RUNNING to SETTLED; outside RUNNING nothing changes.
    """
    if state.phase is not Phase.RUNNING:
        return state, state.rotation, False

    start_ts = timestamp_ms if state.start_ts is None else state.start_ts
    if state.duration_ms <= 0:
        progress = 1.0
    else:
        progress = min(max((timestamp_ms - start_ts) / state.duration_ms, 0.0), 1.0)

    if progress >= 1.0:
        settled = replace(
            state, phase=Phase.SETTLED, rotation=state.final_rotation, start_ts=start_ts
        )
        return settled, state.final_rotation, True

    rotation = state.final_rotation * ease_out_cubic(progress)
    return replace(state, rotation=rotation, start_ts=start_ts), rotation, False


class AnimationDriver:
    def __init__(
        self,
        on_rotation: Optional[Callable[[float], None]] = None,
        on_settled: Optional[Callable[[Any], None]] = None,
    ) -> None:
        self.state = SpinState()
        self.on_rotation = on_rotation
        self.on_settled = on_settled
        self._result: Any = None

    @property
    def is_spinning(self) -> bool:
        return self.state.phase is Phase.RUNNING

    @property
    def rotation(self) -> float:
        return self.state.rotation

    def request_spin(self, final_rotation: float, duration_ms: float, result: Any = None) -> bool:
        """Start a spin; `result` is handed to on_settled when it stops."""
        if self.is_spinning:
            log.debug("Spin already running; request ignored")
            return False
        self.state = start_spin(self.state, final_rotation, duration_ms)
        self._result = result
        return True

    def tick(self, timestamp_ms: float) -> bool:
        """Feed one frame. Returns True while another frame is wanted."""
        if not self.is_spinning:
            return False
        self.state, rotation, completed = step(self.state, timestamp_ms)
        if self.on_rotation is not None:
            self.on_rotation(rotation)
        if completed:
            result, self._result = self._result, None
            if self.on_settled is not None:
                self.on_settled(result)
            return False
        return True


def run_frames(
    driver: AnimationDriver,
    clock: Callable[[], float],
    sleep: Callable[[float], None],
    frame_ms: float,
) -> int:
    """Tick `driver` until it settles. `clock` returns ms; `sleep` takes ms."""
    frames = 0
    while driver.is_spinning:
        frames += 1
        if driver.tick(clock()):
            sleep(frame_ms)
    return frames
