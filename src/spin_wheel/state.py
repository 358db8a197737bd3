from __future__ import annotations

import json
import logging
import os
import random
from dataclasses import replace
from typing import Iterable, List, Optional

from .identity import generate_id, generate_pastel_color
from .models import Participant, WheelSettings, WheelState
from .project_constants import STATE_VERSION

log = logging.getLogger(__name__)


def default_state() -> WheelState:
    return WheelState(version=STATE_VERSION, participants=(), settings=WheelSettings())


def load_state(path: str) -> WheelState:
    """
    Read the state file. A missing, unreadable or foreign-version file
    yields the default state rather than an error.
    """
    if not os.path.exists(path):
        return default_state()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        log.warning("Failed to load state from %s: %s", path, e)
        return default_state()

    if not isinstance(raw, dict) or raw.get("version") != STATE_VERSION:
        log.warning("Unsupported state version in %s, using default", path)
        return default_state()

    try:
        return WheelState.from_dict(raw)
    except (KeyError, TypeError, ValueError) as e:
        log.warning("Malformed state in %s: %s", path, e)
        return default_state()


def save_state(state: WheelState, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(state.to_dict(), f, indent=2, ensure_ascii=False)


def eligible_participants(participants: Iterable[Participant]) -> List[Participant]:
    return [p for p in participants if not p.excluded]


def new_participant(name: str, rng: Optional[random.Random] = None) -> Participant:
    return Participant(id=generate_id(), name=name, color=generate_pastel_color(rng))


def add_participant(
    state: WheelState, name: str, rng: Optional[random.Random] = None
) -> WheelState:
    name = name.strip()
    if not name:
        raise RuntimeError("Participant name must not be empty.")
    return replace(state, participants=state.participants + (new_participant(name, rng),))


def _find(state: WheelState, participant_id: str) -> Participant:
    for p in state.participants:
        if p.id == participant_id:
            return p
    raise RuntimeError(f"Unknown participant id: {participant_id}")


def remove_participant(state: WheelState, participant_id: str) -> WheelState:
    _find(state, participant_id)
    return replace(
        state,
        participants=tuple(p for p in state.participants if p.id != participant_id),
    )


def _toggle(state: WheelState, participant_id: str, flag: str) -> WheelState:
    target = _find(state, participant_id)
    flipped = replace(target, **{flag: not getattr(target, flag)})
    return replace(
        state,
        participants=tuple(flipped if p.id == participant_id else p for p in state.participants),
    )


def toggle_excluded(state: WheelState, participant_id: str) -> WheelState:
    return _toggle(state, participant_id, "excluded")


def toggle_boosted(state: WheelState, participant_id: str) -> WheelState:
    return _toggle(state, participant_id, "boosted")


def replace_participants(
    state: WheelState, names: Iterable[str], rng: Optional[random.Random] = None
) -> WheelState:
    # Settings survive an import; only the roster is swapped.
    return replace(state, participants=tuple(new_participant(n, rng) for n in names))


def update_settings(state: WheelState, **changes: Optional[int]) -> WheelState:
    changes = {k: v for k, v in changes.items() if v is not None}
    return replace(state, settings=replace(state.settings, **changes))
