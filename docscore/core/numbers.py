from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def clamp_score(value: float, min_value: int = 0, max_value: int = 100) -> int:
    return max(min_value, min(max_value, round_half_up(value)))
