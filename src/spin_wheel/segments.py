from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Sequence

from .models import Participant
from .pool import Slot
from .project_constants import FULL_CIRCLE


@dataclass(frozen=True)
class Segment:
    participant: Participant
    start_angle: float
    end_angle: float  # exclusive

    @property
    def owner_id(self) -> str:
        return self.participant.id

    @property
    def width(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def midpoint(self) -> float:
        return (self.start_angle + self.end_angle) / 2


def partition(pool: Sequence[Slot]) -> List[Segment]:
    if not pool:
        return []
    n = len(pool)
    width = FULL_CIRCLE / n
    segments: List[Segment] = []
    for i, slot in enumerate(pool):
        # Pin the final edge so the wheel closes at exactly 360.
        end = FULL_CIRCLE if i == n - 1 else width * (i + 1)
        segments.append(Segment(slot.participant, width * i, end))
    return segments


def merge_adjacent(segments: Sequence[Segment]) -> List[Segment]:
    """
    Collapse consecutive segments with the same owner into one.

    Runs are never joined across the 0/360 seam: a wheel starting and
    ending with the same owner keeps two separate regions there.
    """
    merged: List[Segment] = []
    for seg in segments:
        if merged and merged[-1].owner_id == seg.owner_id:
            merged[-1] = replace(merged[-1], end_angle=seg.end_angle)
        else:
            merged.append(seg)
    return merged
