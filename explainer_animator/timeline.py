from __future__ import annotations

import math
from typing import List, Literal, Sequence, Tuple, Union

from pydantic import BaseModel, Field


DEFAULT_FPS = 30


class NarrationSegment(BaseModel):
    kind: Literal["narration"] = "narration"
    text: str
    duration: float = Field(..., ge=0, description="Seconds; estimated until resolved")


class AnimationSegment(BaseModel):
    kind: Literal["animation"] = "animation"
    name: str
    duration: float = Field(..., ge=0)


class SilenceSegment(BaseModel):
    kind: Literal["silence"] = "silence"
    duration: float = Field(..., ge=0)


class ClipSegment(BaseModel):
    kind: Literal["clip"] = "clip"
    path: str
    duration: float = Field(..., ge=0)


Segment = Union[NarrationSegment, AnimationSegment, SilenceSegment, ClipSegment]


class Timeline:
    """Ordered, append-only sequence of segments played at a fixed frame rate."""

    def __init__(self, fps: int = DEFAULT_FPS) -> None:
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self._segments: List[Segment] = []
        self._fps = fps

    @property
    def fps(self) -> int:
        return self._fps

    @property
    def segments(self) -> Sequence[Segment]:
        return tuple(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def add_segment(self, segment: Segment) -> None:
        self._segments.append(segment)

    def total_duration(self) -> float:
        return sum(seg.duration for seg in self._segments)

    def duration_before(self, index: int) -> float:
        """Sum of the durations of every segment with position < index."""
        return sum(seg.duration for seg in self._segments[:index])

    def total_frames(self) -> int:
        duration = self.total_duration()
        if duration <= 0:
            return 0
        return int(math.ceil(duration * self._fps))

    def frame_at(self, time: float) -> int:
        """Map seconds to a frame index, clamped to the valid range.

        Negative or NaN time maps to frame 0, time past the end maps to the
        last frame, and an empty timeline always answers 0.
        """
        total = self.total_frames()
        if total == 0 or not time > 0:
            return 0
        frame = int(math.floor(time * self._fps))
        return min(frame, total - 1)

    def update_segment_duration(self, index: int, duration: float) -> bool:
        if index < 0 or index >= len(self._segments):
            return False
        self._segments[index].duration = duration
        return True

    def narration_indices(self) -> List[int]:
        return [i for i, seg in enumerate(self._segments) if isinstance(seg, NarrationSegment)]

    def segments_in_range(self, start: float, end: float) -> List[Tuple[float, Segment]]:
        """Return ``(segment_start, segment)`` for every segment overlapping ``[start, end)``."""
        hits: List[Tuple[float, Segment]] = []
        cursor = 0.0
        for seg in self._segments:
            seg_end = cursor + seg.duration
            if cursor < end and seg_end > start:
                hits.append((cursor, seg))
            cursor = seg_end
            if cursor >= end:
                break
        return hits


class TimelineBuilder:
    """Fluent constructor, mostly for tests and fixtures."""

    def __init__(self) -> None:
        self._segments: List[Segment] = []
        self._fps = DEFAULT_FPS

    def fps(self, fps: int) -> TimelineBuilder:
        self._fps = fps
        return self

    def narration(self, text: str, duration: float) -> TimelineBuilder:
        self._segments.append(NarrationSegment(text=text, duration=duration))
        return self

    def animation(self, name: str, duration: float) -> TimelineBuilder:
        self._segments.append(AnimationSegment(name=name, duration=duration))
        return self

    def silence(self, duration: float) -> TimelineBuilder:
        self._segments.append(SilenceSegment(duration=duration))
        return self

    def clip(self, path: str, duration: float) -> TimelineBuilder:
        self._segments.append(ClipSegment(path=path, duration=duration))
        return self

    def build(self) -> Timeline:
        timeline = Timeline(fps=self._fps)
        for seg in self._segments:
            timeline.add_segment(seg)
        return timeline
