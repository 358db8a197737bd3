from __future__ import annotations

import random
from bisect import bisect_right
from typing import Optional, Sequence

from .project_constants import FULL_CIRCLE, MIN_FULL_TURNS
from .segments import Segment

# Segment angles put 0 at 3 o'clock; the pointer sits at 12 o'clock.
POINTER_OFFSET = 90.0


def target_angle_for_winner(
    segments: Sequence[Segment], winner_id: str, rng: random.Random
) -> Optional[float]:
    """
    Midpoint of one of the winner's raw segments, chosen uniformly.

    A boosted participant or a multi-round wheel owns several disjoint
    regions; any of them is a valid place to stop.
    """
    owned = [s for s in segments if s.owner_id == winner_id]
    if not owned:
        return None
    return owned[rng.randrange(len(owned))].midpoint


def final_rotation(target_angle: float, min_full_turns: int = MIN_FULL_TURNS) -> float:
    return min_full_turns * FULL_CIRCLE + (FULL_CIRCLE - target_angle) - POINTER_OFFSET


def pointer_angle(rotation: float) -> float:
    """Content angle sitting under the pointer after rotating clockwise by `rotation`."""
    return (FULL_CIRCLE - POINTER_OFFSET - rotation) % FULL_CIRCLE


def segment_at_angle(segments: Sequence[Segment], angle: float) -> Optional[Segment]:
    if not segments:
        return None
    angle = angle % FULL_CIRCLE
    starts = [s.start_angle for s in segments]
    idx = bisect_right(starts, angle) - 1
    if idx < 0 or idx >= len(segments):
        return None
    return segments[idx]
