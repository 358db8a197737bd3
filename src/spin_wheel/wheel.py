from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .animation import AnimationDriver
from .draw import select_winner
from .models import Participant, WheelSettings
from .pool import Slot, build_pool
from .project_constants import MIN_FULL_TURNS
from .rotation import final_rotation, target_angle_for_winner
from .segments import Segment, merge_adjacent, partition


@dataclass(frozen=True)
class WheelLayout:
    pool: List[Slot]
    segments: List[Segment]  # raw, one per slot
    merged: List[Segment]

    @property
    def can_spin(self) -> bool:
        return len(self.pool) > 0


@dataclass(frozen=True)
class SpinPlan:
    """Everything a spin needs, captured when it starts."""

    winner: Participant
    target_angle: float
    final_rotation: float
    duration_ms: int
    layout: WheelLayout


@dataclass(frozen=True)
class RenderFrame:
    segments: List[Segment]  # merged
    rotation_degrees: float
    is_spinning: bool


def build_layout(participants: Iterable[Participant], settings: WheelSettings) -> WheelLayout:
    pool = build_pool(participants, settings)
    segments = partition(pool)
    return WheelLayout(pool=pool, segments=segments, merged=merge_adjacent(segments))


def plan_spin(
    layout: WheelLayout,
    settings: WheelSettings,
    rng: random.Random,
    min_full_turns: int = MIN_FULL_TURNS,
) -> Optional[SpinPlan]:
    winner = select_winner(layout.pool, rng)
    if winner is None:
        return None
    target = target_angle_for_winner(layout.segments, winner.id, rng)
    if target is None:
        return None
    return SpinPlan(
        winner=winner,
        target_angle=target,
        final_rotation=final_rotation(target, min_full_turns),
        duration_ms=settings.spin_duration_ms,
        layout=layout,
    )


def start_plan(driver: AnimationDriver, plan: SpinPlan) -> bool:
    return driver.request_spin(plan.final_rotation, plan.duration_ms, result=plan.winner)


def render_frame(layout: WheelLayout, driver: AnimationDriver) -> RenderFrame:
    return RenderFrame(
        segments=layout.merged,
        rotation_degrees=driver.rotation,
        is_spinning=driver.is_spinning,
    )
