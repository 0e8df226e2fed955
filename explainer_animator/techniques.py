from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Callable, ClassVar, Dict, List

from .easing import Ease, ease


@dataclass
class TechniqueOutput:
    """Visual transform produced by a technique; the default is the identity."""

    opacity: float = 1.0
    translate_x: float = 0.0
    translate_y: float = 0.0
    scale: float = 1.0
    rotation: float = 0.0


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _require_non_negative(label: str, value: float) -> None:
    if value < 0:
        raise ValueError(f"{label} must be >= 0, got {value}")


class Technique(ABC):
    """Capability shared by every animation technique.

    Subclasses expose ``name`` and ``duration`` (seconds) and implement
    :meth:`apply`. Instances are immutable; the ``with_*`` helpers return
    modified copies.
    """

    name: ClassVar[str] = "Technique"
    duration: float

    @abstractmethod
    def apply(self, progress: float) -> TechniqueOutput:  # pragma: no cover - interface
        raise NotImplementedError

    def apply_items(self, count: int, progress: float) -> List[TechniqueOutput]:
        return [self.apply(progress) for _ in range(count)]

    def with_ease(self, curve: Ease) -> WithEase:
        return WithEase(inner=self, curve=Ease(curve))


@dataclass(frozen=True)
class FadeIn(Technique):
    name: ClassVar[str] = "FadeIn"
    duration: float = 0.5

    def __post_init__(self) -> None:
        _require_non_negative("duration", self.duration)

    def apply(self, progress: float) -> TechniqueOutput:
        return TechniqueOutput(opacity=progress)


@dataclass(frozen=True)
class FadeUp(Technique):
    name: ClassVar[str] = "FadeUp"
    duration: float = 0.6
    distance: float = 30.0

    def __post_init__(self) -> None:
        _require_non_negative("duration", self.duration)

    def apply(self, progress: float) -> TechniqueOutput:
        return TechniqueOutput(opacity=progress, translate_y=self.distance * (1 - progress))


@dataclass(frozen=True)
class Slide(Technique):
    name: ClassVar[str] = "Slide"
    duration: float = 0.5
    offset_x: float = 100.0
    offset_y: float = 0.0

    def __post_init__(self) -> None:
        _require_non_negative("duration", self.duration)

    def apply(self, progress: float) -> TechniqueOutput:
        remaining = 1 - progress
        return TechniqueOutput(translate_x=self.offset_x * remaining, translate_y=self.offset_y * remaining)


@dataclass(frozen=True)
class Scale(Technique):
    name: ClassVar[str] = "Scale"
    duration: float = 0.4
    from_scale: float = 0.0
    to_scale: float = 1.0

    def __post_init__(self) -> None:
        _require_non_negative("duration", self.duration)

    def apply(self, progress: float) -> TechniqueOutput:
        return TechniqueOutput(scale=_lerp(self.from_scale, self.to_scale, progress))


@dataclass(frozen=True)
class CountUp(Technique):
    """Counts a number from ``from_value`` to ``to_value``.

    The transform only carries progress (through ``opacity``); renderers that
    display the number call :meth:`value_at` with the same progress.
    """

    name: ClassVar[str] = "CountUp"
    duration: float = 1.0
    from_value: float = 0.0
    to_value: float = 100.0

    def __post_init__(self) -> None:
        _require_non_negative("duration", self.duration)

    def value_at(self, progress: float) -> float:
        return _lerp(self.from_value, self.to_value, progress)

    def apply(self, progress: float) -> TechniqueOutput:
        return TechniqueOutput(opacity=progress)


@dataclass(frozen=True)
class WithEase(Technique):
    inner: Technique
    curve: Ease = Ease.LINEAR

    @property
    def name(self) -> str:  # type: ignore[override]
        return self.inner.name

    @property
    def duration(self) -> float:  # type: ignore[override]
        return self.inner.duration

    def apply(self, progress: float) -> TechniqueOutput:
        return self.inner.apply(ease(self.curve, progress))

    def apply_items(self, count: int, progress: float) -> List[TechniqueOutput]:
        return self.inner.apply_items(count, ease(self.curve, progress))


@dataclass(frozen=True)
class Stagger(Technique):
    """Runs ``inner`` once per item, each item starting ``delay`` seconds later.

    Item windows are laid out against the item count passed to
    :meth:`apply_items`, so a list longer or shorter than ``count`` still
    finishes exactly at progress 1.
    """

    name: ClassVar[str] = "Stagger"
    inner: Technique
    delay: float = 0.1
    count: int = 1

    def __post_init__(self) -> None:
        _require_non_negative("delay", self.delay)
        _require_non_negative("count", self.count)

    def with_delay(self, delay: float) -> Stagger:
        return replace(self, delay=delay)

    def with_count(self, count: int) -> Stagger:
        return replace(self, count=count)

    def duration_for(self, count: int) -> float:
        extra = self.delay * (count - 1) if count > 1 else 0.0
        return self.inner.duration + extra

    @property
    def duration(self) -> float:  # type: ignore[override]
        return self.duration_for(self.count)

    def apply(self, progress: float) -> TechniqueOutput:
        # A single target plays as the first item of the configured list.
        return self.apply_items(max(self.count, 1), progress)[0]

    def apply_items(self, count: int, progress: float) -> List[TechniqueOutput]:
        total = self.duration_for(count)
        if total <= 0:
            return [self.inner.apply(1.0) for _ in range(count)]
        outputs: List[TechniqueOutput] = []
        for i in range(count):
            offset = self.delay * i if count > 1 else 0.0
            start = offset / total
            end = (offset + self.inner.duration) / total
            if progress <= start:
                outputs.append(self.inner.apply(0.0))
            elif progress >= end or progress >= 1.0:
                outputs.append(self.inner.apply(1.0))
            else:
                outputs.append(self.inner.apply((progress - start) / (end - start)))
        return outputs


TECHNIQUES: Dict[str, Callable[[], Technique]] = {
    "FadeIn": FadeIn,
    "FadeUp": FadeUp,
    "Slide": Slide,
    "Scale": Scale,
    "CountUp": CountUp,
}
