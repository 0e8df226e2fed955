from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Dict


BACK_OVERSHOOT = 1.70158


class Ease(str, Enum):
    LINEAR = "linear"
    EASE_IN = "easeIn"
    EASE_OUT = "easeOut"
    EASE_IN_OUT = "easeInOut"
    OUT_BACK = "outBack"
    OUT_BOUNCE = "outBounce"
    SPRING = "spring"


def clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(value, max_value))


def linear(t: float) -> float:
    return clamp(t, 0.0, 1.0)


def ease_in_quad(t: float) -> float:
    t = clamp(t, 0.0, 1.0)
    return t * t


def ease_out_quad(t: float) -> float:
    t = clamp(t, 0.0, 1.0)
    return 1 - (1 - t) * (1 - t)


def ease_in_out_quad(t: float) -> float:
    t = clamp(t, 0.0, 1.0)
    if t < 0.5:
        return 2 * t * t
    return 1 - ((-2 * t + 2) ** 2) / 2


def ease_out_back(t: float) -> float:
    # Overshoots past 1.0 before settling.
    t = clamp(t, 0.0, 1.0)
    c1 = BACK_OVERSHOOT
    c3 = c1 + 1
    return 1 + c3 * (t - 1) ** 3 + c1 * (t - 1) ** 2


def ease_out_bounce(t: float) -> float:
    t = clamp(t, 0.0, 1.0)
    n1 = 7.5625
    d1 = 2.75
    if t < 1 / d1:
        return n1 * t * t
    if t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    if t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    t -= 2.625 / d1
    return n1 * t * t + 0.984375


def spring(t: float) -> float:
    # Damped oscillation; lands within ~0.0025 of 1.0 at t=1.
    t = clamp(t, 0.0, 1.0)
    return 1 - math.exp(-6 * t) * math.cos(2 * math.pi * t)


EASING_FUNCTIONS: Dict[Ease, Callable[[float], float]] = {
    Ease.LINEAR: linear,
    Ease.EASE_IN: ease_in_quad,
    Ease.EASE_OUT: ease_out_quad,
    Ease.EASE_IN_OUT: ease_in_out_quad,
    Ease.OUT_BACK: ease_out_back,
    Ease.OUT_BOUNCE: ease_out_bounce,
    Ease.SPRING: spring,
}


def ease(curve: Ease, t: float) -> float:
    return EASING_FUNCTIONS[Ease(curve)](t)
