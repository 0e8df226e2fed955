from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, NewType, Optional, Sequence

from .config import SceneSettings
from .techniques import Technique
from .themes import Theme
from .timeline import AnimationSegment, NarrationSegment, SilenceSegment, Timeline
from .types import ElementKind, MetricKind, SectionKind, ShowKind, StepsKind, TitleKind

if TYPE_CHECKING:
    from .voice import VoiceBackend


logger = logging.getLogger(__name__)


Element = NewType("Element", int)


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class DurationMismatchError(ValueError):
    """The number of supplied narration durations differs from the narration count."""

    def __init__(self, expected: int, provided: int) -> None:
        super().__init__(f"expected {expected} narration durations, got {provided}")
        self.expected = expected
        self.provided = provided


@dataclass
class ElementRecord:
    id: int
    kind: ElementKind
    content: str
    created_at: float
    segments_at_creation: int
    items: List[str] = field(default_factory=list)
    ended_at: Optional[float] = None
    segments_at_end: Optional[int] = None

    def is_visible(self, time: float) -> bool:
        return self.created_at <= time and (self.ended_at is None or time < self.ended_at)


@dataclass
class AnimationBinding:
    technique: Technique
    targets: List[int]
    segment_index: int


class Facade:
    """Sequential authoring surface for a single scene.

    Every call either appends a segment to the timeline or records an element
    or animation against the timeline as it stands at call time. Elements
    remember how many segments existed when they were created (and cleared),
    so their timestamps can be recomputed after narration durations change.
    """

    def __init__(
        self,
        settings: Optional[SceneSettings] = None,
        theme: Optional[Theme] = None,
        voice: Optional[VoiceBackend] = None,
    ) -> None:
        self.settings = settings or SceneSettings()
        self._timeline = Timeline(fps=self.settings.fps)
        self._elements: List[ElementRecord] = []
        self._animations: List[AnimationBinding] = []
        self._next_element_id = 0
        self._theme = theme or Theme.dark()
        self._voice = voice

    # -- accessors ---------------------------------------------------------

    @property
    def timeline(self) -> Timeline:
        return self._timeline

    @property
    def elements(self) -> Sequence[ElementRecord]:
        return tuple(self._elements)

    @property
    def animations(self) -> Sequence[AnimationBinding]:
        return tuple(self._animations)

    @property
    def current_theme(self) -> Theme:
        return self._theme

    @property
    def current_voice(self) -> Optional[VoiceBackend]:
        return self._voice

    def element(self, handle: Element) -> ElementRecord:
        if not 0 <= handle < len(self._elements):
            raise IndexError(f"unknown element handle {handle}")
        return self._elements[handle]

    def narration_texts(self) -> List[str]:
        segments = self._timeline.segments
        return [segments[i].text for i in self._timeline.narration_indices()]  # type: ignore[union-attr]

    # -- configuration -----------------------------------------------------

    def set_theme(self, theme: Theme) -> None:
        self._theme = theme

    def set_voice(self, voice: VoiceBackend) -> None:
        self._voice = voice

    # -- content -----------------------------------------------------------

    def narrate(self, text: str) -> None:
        words = max(len(text.split()), 1)
        duration = words * 60.0 / self.settings.words_per_minute
        self._timeline.add_segment(NarrationSegment(text=text, duration=duration))
        logger.debug("narrate %r (%d words, est. %.2fs)", text, words, duration)

    def show(self, text: str) -> Element:
        return self._mint(ShowKind(), text)

    # -- structure ---------------------------------------------------------

    def title(self, text: str) -> Element:
        return self._mint(TitleKind(), text)

    def section(self, text: str) -> Element:
        return self._mint(SectionKind(), text)

    def metric(self, label: str, value: str, direction: Direction = Direction.NEUTRAL) -> Element:
        direction = Direction(direction)
        return self._mint(MetricKind(direction=direction.value), f"{label}: {value}")

    def steps(self, items: Sequence[str]) -> Element:
        items = list(items)
        return self._mint(StepsKind(count=len(items)), "", items)

    def clear(self) -> None:
        now = self._timeline.total_duration()
        count = len(self._timeline)
        cleared = 0
        for record in self._elements:
            if record.ended_at is None:
                record.ended_at = now
                record.segments_at_end = count
                cleared += 1
        logger.debug("clear at %.2fs (%d elements)", now, cleared)

    # -- pacing ------------------------------------------------------------

    def beat(self) -> None:
        self._timeline.add_segment(SilenceSegment(duration=self.settings.beat_duration))

    def breath(self) -> None:
        self._timeline.add_segment(SilenceSegment(duration=self.settings.breath_duration))

    def wait(self, duration: float) -> None:
        if duration < 0:
            raise ValueError(f"wait duration must be >= 0, got {duration}")
        self._timeline.add_segment(SilenceSegment(duration=duration))

    # -- techniques --------------------------------------------------------

    def play(self, technique: Technique) -> None:
        segment_index = len(self._timeline)
        self._timeline.add_segment(AnimationSegment(name=technique.name, duration=technique.duration))
        targets = [self._elements[-1].id] if self._elements else []
        self._animations.append(
            AnimationBinding(technique=technique, targets=targets, segment_index=segment_index)
        )
        logger.debug("play %s for %.2fs on %s", technique.name, technique.duration, targets)

    # -- duration resolution -----------------------------------------------

    def resolve_narration_durations(self, durations: Sequence[float]) -> None:
        """Replace estimated narration durations and retime every element.

        ``durations`` must hold one value per narration segment, in timeline
        order; otherwise :class:`DurationMismatchError` is raised and nothing
        changes. A negative or non-finite duration raises ``ValueError``,
        also before anything is written.
        """
        indices = self._timeline.narration_indices()
        if len(durations) != len(indices):
            raise DurationMismatchError(expected=len(indices), provided=len(durations))
        for position, duration in enumerate(durations):
            if not math.isfinite(duration) or duration < 0:
                raise ValueError(f"narration duration {position} must be finite and >= 0, got {duration}")

        before = self._timeline.total_duration()
        for index, duration in zip(indices, durations):
            self._timeline.update_segment_duration(index, float(duration))

        for record in self._elements:
            record.created_at = self._timeline.duration_before(record.segments_at_creation)
            if record.segments_at_end is not None:
                record.ended_at = self._timeline.duration_before(record.segments_at_end)

        logger.info(
            "Resolved %d narration durations: %.2fs -> %.2fs",
            len(indices),
            before,
            self._timeline.total_duration(),
        )

    # -- internal ----------------------------------------------------------

    def _mint(self, kind: ElementKind, content: str, items: Optional[List[str]] = None) -> Element:
        element_id = self._next_element_id
        self._next_element_id += 1
        record = ElementRecord(
            id=element_id,
            kind=kind,
            content=content,
            items=items or [],
            created_at=self._timeline.total_duration(),
            segments_at_creation=len(self._timeline),
        )
        self._elements.append(record)
        logger.debug("element %d (%s) at %.2fs", element_id, kind.type, record.created_at)
        return Element(element_id)
