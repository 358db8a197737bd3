from __future__ import annotations

from typing import List, Sequence

from .rotation import pointer_angle, segment_at_angle
from .segments import Segment
from .wheel import RenderFrame

BAR_WIDTH = 30


def format_segments(segments: Sequence[Segment]) -> str:
    if not segments:
        return "(empty wheel)"
    lines: List[str] = [f"{'from':>8} {'to':>8} {'width':>8}  participant"]
    for s in segments:
        lines.append(
            f"{s.start_angle:8.2f} {s.end_angle:8.2f} {s.width:8.2f}  {s.participant.name}"
        )
    return "\n".join(lines)


def format_frame(frame: RenderFrame, final_rotation: float) -> str:
    """One status line: progress bar, rotation and the name under the pointer."""
    done = frame.rotation_degrees / final_rotation if final_rotation else 1.0
    filled = int(round(max(0.0, min(done, 1.0)) * BAR_WIDTH))
    bar = "#" * filled + "." * (BAR_WIDTH - filled)

    under = segment_at_angle(frame.segments, pointer_angle(frame.rotation_degrees))
    name = under.participant.name if under else "-"
    return f"[{bar}] {frame.rotation_degrees:9.2f} deg  > {name}"
