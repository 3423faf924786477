from __future__ import annotations

import math
import random
from dataclasses import dataclass

JITTER_FRACTION = 0.1


@dataclass(frozen=True)
class RetryConfig:
    # seconds
    base_delay: float
    max_delay: float
    # total number of attempts, including the first one
    max_retries: int


def calculate_backoff(
    base_delay: float,
    max_delay: float,
    attempt: int,
    rng: random.Random | None = None,
) -> float:
    """Exponential backoff with up to 10% random jitter, capped at max_delay."""

    try:
        backoff = base_delay * math.pow(2, attempt)
    except OverflowError:
        return max_delay

    uniform = (rng or random).uniform(0.0, JITTER_FRACTION)
    backoff += backoff * uniform
    return min(max_delay, backoff)
