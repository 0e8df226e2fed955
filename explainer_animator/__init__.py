from .easing import Ease
from .facade import Direction, DurationMismatchError, Element, Facade
from .frame import compute_frame_state
from .techniques import CountUp, FadeIn, FadeUp, Scale, Slide, Stagger, Technique, TechniqueOutput, WithEase
from .themes import Theme
from .timeline import Timeline, TimelineBuilder

__all__ = [
    "CountUp",
    "Direction",
    "DurationMismatchError",
    "Ease",
    "Element",
    "Facade",
    "FadeIn",
    "FadeUp",
    "Scale",
    "Slide",
    "Stagger",
    "Technique",
    "TechniqueOutput",
    "Theme",
    "Timeline",
    "TimelineBuilder",
    "WithEase",
    "compute_frame_state",
]
