from __future__ import annotations

import json
import math
import random
from datetime import datetime, timezone
from typing import Any, Dict

from .models import Participant, WheelSettings, WheelState
from .rotation import pointer_angle, segment_at_angle
from .wheel import SpinPlan, build_layout, plan_spin

TOOL_NAME = "spin-wheel"
TOOL_VERSION = "1.0.0"


def build_audit(
    state: WheelState, plan: SpinPlan, seed: int, min_full_turns: int
) -> Dict[str, Any]:
    return {
        "metadata": {
            "tool": TOOL_NAME,
            "version": TOOL_VERSION,
            "generated_at_utc": datetime.now(timezone.utc).isoformat(),
            "seed": seed,
            "settings": state.settings.to_dict(),
            "pool_size": len(plan.layout.pool),
            "min_full_turns": min_full_turns,
            "target_angle": plan.target_angle,
            "final_rotation": plan.final_rotation,
        },
        "winner": {
            "id": plan.winner.id,
            "name": plan.winner.name,
        },
        # Stored in wheel order so anyone can rebuild the same pool.
        "participants": [p.to_dict() for p in state.participants],
    }


def verify_audit(audit_path: str) -> Dict[str, Any]:
    with open(audit_path, "r", encoding="utf-8") as f:
        audit = json.load(f)

    meta = audit["metadata"]
    seed = int(meta["seed"])
    min_full_turns = int(meta["min_full_turns"])
    settings = WheelSettings.from_dict(meta["settings"])
    participants = tuple(Participant.from_dict(p) for p in audit["participants"])

    layout = build_layout(participants, settings)
    if len(layout.pool) != int(meta["pool_size"]):
        raise RuntimeError(
            f"Pool size mismatch: audit={meta['pool_size']} recomputed={len(layout.pool)}"
        )

    plan = plan_spin(layout, settings, random.Random(seed), min_full_turns)
    if plan is None:
        raise RuntimeError("Audit describes a wheel with no eligible participants.")

    winner_expected = audit["winner"]["id"]
    if plan.winner.id != winner_expected:
        raise RuntimeError(
            f"Winner mismatch: audit={winner_expected} recomputed={plan.winner.id}"
        )

    if not math.isclose(plan.target_angle, float(meta["target_angle"])):
        raise RuntimeError(
            f"Target angle mismatch: audit={meta['target_angle']} recomputed={plan.target_angle}"
        )

    if not math.isclose(plan.final_rotation, float(meta["final_rotation"])):
        raise RuntimeError(
            f"Final rotation mismatch: audit={meta['final_rotation']} "
            f"recomputed={plan.final_rotation}"
        )

    landed = segment_at_angle(layout.segments, pointer_angle(plan.final_rotation))
    if landed is None or landed.owner_id != plan.winner.id:
        raise RuntimeError("Final rotation does not stop on the winner's segment.")

    return {
        "ok": True,
        "seed": seed,
        "winner": plan.winner.id,
        "winner_name": plan.winner.name,
        "final_rotation": plan.final_rotation,
        "pool_size": len(layout.pool),
    }
