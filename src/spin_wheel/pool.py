from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List

from .models import Participant, WheelSettings


@dataclass(frozen=True)
class Slot:
    participant: Participant

    @property
    def participant_id(self) -> str:
        return self.participant.id


def slot_count(participant: Participant, settings: WheelSettings) -> int:
    if participant.excluded:
        return 0
    count = settings.base_slot_count
    if participant.boosted:
        count *= settings.boost_multiplier
    return count


def build_pool(participants: Iterable[Participant], settings: WheelSettings) -> List[Slot]:
    """
    Expand participants into the ordered slot pool.

    One round per base slot; each round walks the list in order. A boosted
    participant contributes boost_multiplier consecutive slots per round so
    its region stays contiguous on the wheel.
    """
    weighted = [p for p in participants if slot_count(p, settings) > 0]
    pool: List[Slot] = []
    for _ in range(settings.base_slot_count):
        for p in weighted:
            repeat = settings.boost_multiplier if p.boosted else 1
            pool.extend(Slot(p) for _ in range(repeat))
    return pool


def slot_totals(pool: Iterable[Slot]) -> Dict[str, int]:
    totals: Dict[str, int] = {}
    for slot in pool:
        totals[slot.participant_id] = totals.get(slot.participant_id, 0) + 1
    return totals
