from __future__ import annotations

import random
from collections import Counter
from typing import Dict, Optional, Sequence

from .models import Participant
from .pool import Slot, slot_totals


def select_winner(pool: Sequence[Slot], rng: random.Random) -> Optional[Participant]:
    if not pool:
        return None
    idx = rng.randrange(len(pool))
    return pool[idx].participant


def win_probabilities(pool: Sequence[Slot]) -> Dict[str, float]:
    if not pool:
        return {}
    total = len(pool)
    return {pid: count / total for pid, count in slot_totals(pool).items()}


def simulate_draws(pool: Sequence[Slot], trials: int, rng: random.Random) -> Counter:
    """Run repeated draws and count wins by participant id."""
    wins: Counter = Counter()
    for _ in range(trials):
        winner = select_winner(pool, rng)
        if winner is None:
            break
        wins[winner.id] += 1
    return wins
