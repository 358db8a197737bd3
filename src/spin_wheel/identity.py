from __future__ import annotations

import os
import random
import time
from typing import Optional

import base58


def generate_id() -> str:
    """Millisecond timestamp plus a short base58 suffix, e.g. 1760850000000-3xKp9Qz."""
    suffix = base58.b58encode(os.urandom(6)).decode("ascii")
    return f"{int(time.time() * 1000)}-{suffix}"


def generate_pastel_color(rng: Optional[random.Random] = None) -> str:
    rng = rng or random.Random()
    hue = rng.randrange(360)
    saturation = 60 + rng.random() * 20  # 60-80%
    lightness = 75 + rng.random() * 10  # 75-85%
    return f"hsl({hue}, {saturation:.0f}%, {lightness:.0f}%)"
