from __future__ import annotations

import math
from typing import Dict, List, Optional, Union

from .facade import AnimationBinding, ElementRecord, Facade
from .techniques import TechniqueOutput
from .timeline import NarrationSegment, Timeline
from .types import HEADER_KINDS, ElementState, FrameState, ItemState, ThemeState


NEUTRAL_LAYOUT_Y = 0.5


def compute_frame_state(facade: Facade, time: float) -> FrameState:
    """Compute the complete visual snapshot of ``facade`` at ``time`` seconds.

    Pure: reads the facade and never mutates it. ``time`` is clamped to
    ``[0, total_duration]`` so any float is accepted; NaN is treated as 0.
    """
    timeline = facade.timeline
    total_duration = timeline.total_duration()
    if math.isnan(time):
        time = 0.0
    clamped = min(max(time, 0.0), total_duration)

    elements = [_initial_state(record, clamped) for record in facade.elements]
    index_by_id: Dict[int, int] = {record.id: i for i, record in enumerate(facade.elements)}

    for binding in facade.animations:
        progress = animation_progress(timeline, binding, clamped)
        for target in binding.targets:
            idx = index_by_id.get(target)
            if idx is None or not elements[idx].visible:
                continue
            _apply_binding(elements[idx], binding, progress)

    assign_layout(elements)

    theme = facade.current_theme
    return FrameState(
        time=clamped,
        frame=timeline.frame_at(clamped),
        total_duration=total_duration,
        fps=timeline.fps,
        elements=elements,
        active_narration=active_narration(timeline, clamped),
        theme=ThemeState(name=theme.name, css_properties=dict(theme.to_css_properties())),
    )


def animation_progress(timeline: Timeline, binding: AnimationBinding, time: float) -> float:
    start = timeline.duration_before(binding.segment_index)
    duration = timeline.segments[binding.segment_index].duration
    if time < start:
        return 0.0
    # Zero-length animations count as already complete.
    if duration <= 0 or time >= start + duration:
        return 1.0
    return (time - start) / duration


def assign_layout(elements: List[ElementState]) -> None:
    """Give each visible element a vertical slot, headers first."""
    visible = [e for e in elements if e.visible]
    headers = [e for e in visible if isinstance(e.kind, HEADER_KINDS)]
    body = [e for e in visible if not isinstance(e.kind, HEADER_KINDS)]
    ordered = headers + body
    for element, slot in zip(ordered, layout_slots(len(ordered))):
        element.layout_y = slot


def layout_slots(count: int) -> List[float]:
    if count <= 0:
        return []
    if count == 1:
        return [0.5]
    if count == 2:
        return [0.3, 0.65]
    return [0.2 + 0.6 * i / (count - 1) for i in range(count)]


def active_narration(timeline: Timeline, time: float) -> Optional[str]:
    half_frame = 1.0 / (2 * timeline.fps)
    for _start, segment in timeline.segments_in_range(time, time + half_frame):
        if isinstance(segment, NarrationSegment):
            return segment.text
    return None


def _initial_state(record: ElementRecord, time: float) -> ElementState:
    visible = record.is_visible(time)
    default = 1.0 if visible else 0.0
    return ElementState(
        id=record.id,
        kind=record.kind,
        content=record.content,
        items=[ItemState(text=text, opacity=default, scale=default) for text in record.items],
        visible=visible,
        opacity=default,
        scale=default,
        layout_y=NEUTRAL_LAYOUT_Y,
    )


def _apply_binding(element: ElementState, binding: AnimationBinding, progress: float) -> None:
    if element.items:
        outputs = binding.technique.apply_items(len(element.items), progress)
        for item, output in zip(element.items, outputs):
            _write(item, output)
    else:
        _write(element, binding.technique.apply(progress))


def _write(target: Union[ElementState, ItemState], output: TechniqueOutput) -> None:
    target.opacity = output.opacity
    target.translate_x = output.translate_x
    target.translate_y = output.translate_y
    target.scale = output.scale
    target.rotation = output.rotation
