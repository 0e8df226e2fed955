import math

import pytest

from explainer_animator.timeline import (
    DEFAULT_FPS,
    AnimationSegment,
    ClipSegment,
    NarrationSegment,
    SilenceSegment,
    Timeline,
    TimelineBuilder,
)


def test_empty_timeline_has_zero_duration() -> None:
    tl = Timeline()
    assert tl.total_duration() == 0.0
    assert tl.total_frames() == 0
    assert tl.frame_at(0.0) == 0
    assert tl.frame_at(5.0) == 0


def test_add_segments_and_check_duration() -> None:
    tl = Timeline(fps=30)
    tl.add_segment(NarrationSegment(text="Hello", duration=2.0))
    tl.add_segment(SilenceSegment(duration=0.5))
    tl.add_segment(AnimationSegment(name="FadeIn", duration=1.0))
    assert tl.total_duration() == pytest.approx(3.5)
    assert len(tl.segments) == 3


def test_fps_must_be_positive() -> None:
    with pytest.raises(ValueError):
        Timeline(fps=0)


def test_frame_at_basic_mapping() -> None:
    tl = TimelineBuilder().fps(30).narration("Test", 2.0).silence(1.0).build()
    assert tl.frame_at(0.0) == 0
    assert tl.frame_at(1.0) == 30
    assert tl.frame_at(2.0) == 60
    assert tl.frame_at(2.5) == 75


def test_frame_at_clamps_to_last_frame() -> None:
    tl = TimelineBuilder().fps(60).animation("FadeUp", 1.0).build()
    assert tl.frame_at(0.5) == 30
    assert tl.frame_at(1.0) == 59
    assert tl.frame_at(-1.0) == 0
    assert tl.frame_at(100.0) == 59


def test_frame_at_is_monotonic_and_in_range() -> None:
    tl = TimelineBuilder().fps(24).narration("a b c", 1.3).silence(0.45).build()
    last = -1
    for step in range(-10, 250):
        frame = tl.frame_at(step / 100.0)
        assert frame >= last
        assert 0 <= frame <= tl.total_frames() - 1
        last = frame


@pytest.mark.parametrize(
    "durations, fps",
    [([1.0], 30), ([0.1], 30), ([0.25, 0.3333], 24), ([2.0, 0.01], 60)],
)
def test_total_frames_is_ceiling(durations, fps) -> None:
    builder = TimelineBuilder().fps(fps)
    for d in durations:
        builder.silence(d)
    tl = builder.build()
    assert tl.total_frames() == math.ceil(sum(durations) * fps)


def test_zero_duration_segments_give_zero_frames() -> None:
    tl = TimelineBuilder().silence(0.0).animation("FadeIn", 0.0).build()
    assert tl.total_frames() == 0


def test_segments_in_range_overlap() -> None:
    tl = (
        TimelineBuilder()
        .fps(30)
        .narration("Hello", 2.0)
        .silence(0.5)
        .animation("FadeIn", 1.0)
        .build()
    )
    hits = tl.segments_in_range(1.5, 2.5)
    assert [start for start, _ in hits] == pytest.approx([0.0, 2.0])
    assert isinstance(hits[0][1], NarrationSegment)
    assert isinstance(hits[1][1], SilenceSegment)

    assert len(tl.segments_in_range(0.0, 0.1)) == 1
    assert tl.segments_in_range(10.0, 20.0) == []


def test_segments_in_range_half_open_boundaries() -> None:
    tl = TimelineBuilder().silence(1.0).silence(1.0).build()
    # [1.0, 1.5) touches the end of the first segment only at its open edge.
    hits = tl.segments_in_range(1.0, 1.5)
    assert len(hits) == 1
    assert hits[0][0] == pytest.approx(1.0)
    # [0.5, 1.0) ends where the second segment starts.
    hits = tl.segments_in_range(0.5, 1.0)
    assert len(hits) == 1
    assert hits[0][0] == pytest.approx(0.0)


def test_builder_produces_correct_timeline() -> None:
    tl = (
        TimelineBuilder()
        .fps(60)
        .narration("Intro", 3.0)
        .silence(0.3)
        .animation("FadeUp", 0.5)
        .clip("/tmp/clip.mp4", 5.0)
        .build()
    )
    assert tl.fps == 60
    assert [seg.kind for seg in tl.segments] == ["narration", "silence", "animation", "clip"]
    assert isinstance(tl.segments[3], ClipSegment)
    assert tl.total_duration() == pytest.approx(8.8)


def test_builder_default_fps() -> None:
    assert TimelineBuilder().build().fps == DEFAULT_FPS == 30


def test_update_segment_duration() -> None:
    tl = TimelineBuilder().narration("Hi", 1.0).silence(0.5).narration("Bye", 1.0).build()
    assert tl.update_segment_duration(1, 1.5)
    assert tl.total_duration() == pytest.approx(3.5)
    assert tl.update_segment_duration(0, 2.0)
    assert tl.total_duration() == pytest.approx(4.5)


@pytest.mark.parametrize("index", [5, -1])
def test_update_segment_duration_out_of_bounds(index) -> None:
    tl = TimelineBuilder().silence(1.0).build()
    assert tl.update_segment_duration(index, 2.0) is False
    assert tl.total_duration() == pytest.approx(1.0)


def test_narration_indices() -> None:
    tl = (
        TimelineBuilder()
        .narration("A", 1.0)
        .silence(0.5)
        .narration("B", 1.0)
        .animation("FadeIn", 0.5)
        .build()
    )
    assert tl.narration_indices() == [0, 2]
    assert TimelineBuilder().silence(1.0).build().narration_indices() == []


def test_duration_before() -> None:
    tl = TimelineBuilder().silence(1.0).narration("x", 0.5).animation("FadeIn", 0.25).build()
    assert tl.duration_before(0) == 0.0
    assert tl.duration_before(2) == pytest.approx(1.5)
    assert tl.duration_before(10) == pytest.approx(1.75)


def test_negative_segment_duration_rejected() -> None:
    with pytest.raises(ValueError):
        SilenceSegment(duration=-1.0)


def test_frame_at_nan_is_first_frame() -> None:
    tl = TimelineBuilder().silence(1.0).build()
    assert tl.frame_at(float("nan")) == 0
