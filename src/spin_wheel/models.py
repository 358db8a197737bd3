from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .project_constants import (
    DEFAULT_BASE_SLOT_COUNT,
    DEFAULT_BOOST_MULTIPLIER,
    DEFAULT_SPIN_DURATION_MS,
    STATE_VERSION,
)


def _flag(d: Dict[str, Any], key: str) -> bool:
    value = d.get(key, False)
    if not isinstance(value, bool):
        raise TypeError(f"{key} must be true or false, got {value!r}")
    return value


def _section(d: Dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = d.get(key, default)
    if not isinstance(value, kind):
        raise TypeError(f"{key} must be a {kind.__name__}, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Participant:
    id: str
    name: str
    color: str
    excluded: bool = False
    boosted: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "excluded": self.excluded,
            "boosted": self.boosted,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Participant":
        if not isinstance(d, dict):
            raise TypeError(f"participant must be an object, got {type(d).__name__}")
        return Participant(
            id=str(d["id"]),
            name=str(d["name"]),
            color=str(d.get("color", "")),
            excluded=_flag(d, "excluded"),
            boosted=_flag(d, "boosted"),
        )


@dataclass(frozen=True)
class WheelSettings:
    base_slot_count: int = DEFAULT_BASE_SLOT_COUNT
    boost_multiplier: int = DEFAULT_BOOST_MULTIPLIER
    spin_duration_ms: int = DEFAULT_SPIN_DURATION_MS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_slot_count": self.base_slot_count,
            "boost_multiplier": self.boost_multiplier,
            "spin_duration_ms": self.spin_duration_ms,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "WheelSettings":
        return WheelSettings(
            base_slot_count=int(d.get("base_slot_count", DEFAULT_BASE_SLOT_COUNT)),
            boost_multiplier=int(d.get("boost_multiplier", DEFAULT_BOOST_MULTIPLIER)),
            spin_duration_ms=int(d.get("spin_duration_ms", DEFAULT_SPIN_DURATION_MS)),
        )


@dataclass(frozen=True)
class WheelState:
    """Versioned record exchanged with the persistence layer."""

    version: int = STATE_VERSION
    participants: Tuple[Participant, ...] = ()
    settings: WheelSettings = field(default_factory=WheelSettings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "participants": [p.to_dict() for p in self.participants],
            "settings": self.settings.to_dict(),
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "WheelState":
        participants: List[Participant] = [
            Participant.from_dict(p) for p in _section(d, "participants", list, [])
        ]
        return WheelState(
            version=int(d.get("version", STATE_VERSION)),
            participants=tuple(participants),
            settings=WheelSettings.from_dict(_section(d, "settings", dict, {})),
        )
