import numpy as np
import pytest

from explainer_animator.facade import Facade
from explainer_animator.timeline import TimelineBuilder
from explainer_animator.voice import (
    AudioClip,
    AudioFormatError,
    WordRateBackend,
    assemble_audio_track,
    resolve_with_backend,
    synthesize_narrations,
)


def test_silence_clip() -> None:
    clip = AudioClip.silence(0.5, sample_rate=1000)
    assert len(clip.samples) == 500
    assert clip.duration == 0.5
    assert not clip.samples.any()


def test_append_and_concat() -> None:
    a = AudioClip.silence(0.25, sample_rate=1000)
    b = AudioClip(np.ones(500, dtype=np.float32), 0.5, 1000, 1)
    joined = AudioClip.concat([a, b], sample_rate=1000)
    assert len(joined.samples) == 750
    assert joined.duration == pytest.approx(0.75)
    assert joined.samples[-1] == 1.0


def test_append_rejects_format_mismatch() -> None:
    a = AudioClip.silence(0.1, sample_rate=1000)
    with pytest.raises(AudioFormatError):
        a.append(AudioClip.silence(0.1, sample_rate=2000))
    with pytest.raises(AudioFormatError):
        a.append(AudioClip(np.zeros(10, dtype=np.float32), 0.1, 1000, 2))


def test_word_rate_backend() -> None:
    backend = WordRateBackend(seconds_per_word=0.5, sample_rate=1000)
    clip = backend.synthesize("one two three")
    assert clip.duration == pytest.approx(1.5)
    assert len(clip.samples) == 1500
    assert clip.samples[0] == pytest.approx(0.42)
    assert backend.synthesize("").duration == pytest.approx(0.5)
    with pytest.raises(ValueError):
        WordRateBackend(seconds_per_word=0.0)


def test_resolve_with_backend_retimes_scene() -> None:
    m = Facade()
    m.narrate("hello world")
    b = m.show("after")
    m.narrate("bye")
    clips = resolve_with_backend(m, WordRateBackend(seconds_per_word=0.5, sample_rate=1000))
    assert [c.duration for c in clips] == pytest.approx([1.0, 0.5])
    assert m.timeline.total_duration() == pytest.approx(1.5)
    assert m.element(b).created_at == pytest.approx(1.0)


def test_resolve_uses_configured_voice() -> None:
    m = Facade(voice=WordRateBackend(seconds_per_word=1.0, sample_rate=1000))
    m.narrate("a b c")
    resolve_with_backend(m)
    assert m.timeline.total_duration() == pytest.approx(3.0)


def test_resolve_without_voice_fails() -> None:
    m = Facade()
    m.narrate("a")
    with pytest.raises(ValueError):
        resolve_with_backend(m)


def test_synthesize_narrations_in_order() -> None:
    m = Facade()
    m.narrate("one")
    m.beat()
    m.narrate("two three")
    clips = synthesize_narrations(m, WordRateBackend(seconds_per_word=0.1, sample_rate=100))
    assert [len(c.samples) for c in clips] == [10, 20]


def test_assemble_places_narration_between_silences() -> None:
    tl = TimelineBuilder().silence(0.5).narration("hi", 1.0).silence(0.5).build()
    clip = AudioClip(np.full(500, 0.42, dtype=np.float32), 0.5, 1000, 1)
    track = assemble_audio_track(tl, sample_rate=1000, clips=[clip])
    assert len(track.samples) == 2000
    assert track.duration == pytest.approx(2.0)
    assert not track.samples[:500].any()
    assert track.samples[500:1000] == pytest.approx(np.full(500, 0.42))
    # Clip shorter than its segment is padded with silence.
    assert not track.samples[1000:].any()


def test_assemble_truncates_long_clip() -> None:
    tl = TimelineBuilder().narration("hi", 0.5).build()
    clip = AudioClip(np.ones(2000, dtype=np.float32), 2.0, 1000, 1)
    track = assemble_audio_track(tl, sample_rate=1000, clips=[clip])
    assert len(track.samples) == 500


def test_assemble_without_clips_is_silent() -> None:
    tl = TimelineBuilder().narration("a", 1.0).animation("FadeIn", 0.5).build()
    track = assemble_audio_track(tl, sample_rate=100)
    assert len(track.samples) == 150
    assert not track.samples.any()
    assert len(assemble_audio_track(TimelineBuilder().build()).samples) == 0


def test_assemble_rejects_wrong_sample_rate() -> None:
    tl = TimelineBuilder().narration("a", 1.0).build()
    with pytest.raises(AudioFormatError):
        assemble_audio_track(tl, sample_rate=1000, clips=[AudioClip.silence(1.0, sample_rate=2000)])


def test_assemble_track_length_matches_timeline() -> None:
    builder = TimelineBuilder()
    for i in range(30):
        builder.narration(f"part {i}", 1.0 / 3.0)
    tl = builder.build()
    clips = [AudioClip(np.ones(300, dtype=np.float32), 0.3, 1000, 1) for _ in range(30)]
    track = assemble_audio_track(tl, sample_rate=1000, clips=clips)
    assert len(track.samples) == 10000
    assert track.duration == pytest.approx(tl.total_duration(), abs=1e-3)
    # The last narration starts where the timeline says it does.
    assert track.samples[9666] == 0.0
    assert track.samples[9667] == 1.0
