from __future__ import annotations

import os
from dataclasses import dataclass
from dotenv import load_dotenv

from .models import WheelSettings
from .project_constants import (
    BASE_SLOT_COUNT_RANGE,
    BOOST_MULTIPLIER_RANGE,
    DEFAULT_FRAME_MS,
    DEFAULT_STATE_FILE,
    MIN_FULL_TURNS,
    SPIN_DURATION_MS_RANGE,
)


def _int_from_env(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")
    if value < minimum:
        raise RuntimeError(f"{name} must be >= {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class AppConfig:
    state_file: str
    min_full_turns: int = MIN_FULL_TURNS
    frame_ms: int = DEFAULT_FRAME_MS

    @staticmethod
    def from_env(state_file_override: str | None = None) -> "AppConfig":
        load_dotenv()

        # --state-file wins over the environment.
        state_file = state_file_override or os.getenv("SPIN_WHEEL_STATE_FILE", "").strip()

        return AppConfig(
            state_file=state_file or DEFAULT_STATE_FILE,
            min_full_turns=_int_from_env("SPIN_WHEEL_MIN_FULL_TURNS", MIN_FULL_TURNS, 1),
            frame_ms=_int_from_env("SPIN_WHEEL_FRAME_MS", DEFAULT_FRAME_MS, 1),
        )


def validate_settings(settings: WheelSettings) -> WheelSettings:
    checks = (
        ("base_slot_count", settings.base_slot_count, BASE_SLOT_COUNT_RANGE),
        ("spin_duration_ms", settings.spin_duration_ms, SPIN_DURATION_MS_RANGE),
        ("boost_multiplier", settings.boost_multiplier, BOOST_MULTIPLIER_RANGE),
    )
    for name, value, (lo, hi) in checks:
        if not lo <= value <= hi:
            raise ValueError(f"{name} must be between {lo} and {hi}, got {value}")
    return settings
