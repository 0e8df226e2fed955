from __future__ import annotations

from typing import Callable, Dict, Optional

from .config import SceneSettings
from .easing import Ease
from .facade import Direction, Facade
from .techniques import CountUp, FadeIn, FadeUp, Slide, Stagger
from .themes import Theme


def build_demo(m: Facade) -> None:
    """Short scene touching every pipeline stage (roughly five seconds)."""
    m.title("Explainer Demo")
    m.narrate("This is a demo of the explainer rendering pipeline.")
    m.play(FadeIn())
    m.beat()

    m.section("Pipeline")
    m.narrate("Scene to timeline to frames to video.")
    m.play(FadeUp())
    m.breath()

    m.show("Built with Python.")
    m.play(FadeIn(duration=0.5))
    m.beat()


def _section_slide() -> Slide:
    return Slide(duration=0.5, offset_x=-200.0).with_ease(Ease.EASE_OUT)


def build_showcase(m: Facade) -> None:
    """Multi-slide introduction; each slide clears the previous one."""
    m.title("What is an explainer?")
    m.play(FadeIn(duration=0.8))
    m.beat()
    m.narrate("What if making explainer videos was as simple as writing a script?")
    m.breath()

    m.clear()
    m.section("The Problem")
    m.play(_section_slide())
    m.narrate("Complex tools. Expensive licenses. Hours of manual work.")
    m.show("Complex tools. Expensive licenses. Manual labor.")
    m.play(FadeUp())
    m.breath()

    m.clear()
    m.section("A Better Way")
    m.play(_section_slide())
    m.narrate("Write a scene. Run one command. Get a video.")
    m.steps(["Write a scene in Python", "Run one command", "Get a finished video"])
    m.play(Stagger(FadeUp().with_ease(Ease.OUT_BACK)).with_count(3))
    m.breath()

    m.clear()
    m.section("Lean and Mean")
    m.play(_section_slide())
    m.narrate("All of this in a few thousand lines of code.")
    m.metric("Lines of Code", "< 5K", Direction.DOWN)
    m.play(CountUp())
    m.beat()

    m.clear()
    m.title("Explainer")
    m.play(FadeIn(duration=0.8))
    m.show("Offline. Fast. Deterministic.")
    m.play(FadeIn(duration=0.6))
    m.narrate("Motion graphics, written as code, rendered offline.")
    m.beat()


SCENES: Dict[str, Callable[[Facade], None]] = {
    "demo": build_demo,
    "showcase": build_showcase,
}


def build_scene(
    name: str,
    settings: Optional[SceneSettings] = None,
    theme: Optional[Theme] = None,
) -> Facade:
    builder = SCENES.get(name)
    if builder is None:
        raise ValueError(f"Unknown scene: {name} (choose from {', '.join(SCENES)})")
    m = Facade(settings=settings, theme=theme)
    builder(m)
    return m
