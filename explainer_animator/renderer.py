from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Tuple

from tqdm import tqdm

from .facade import Facade
from .frame import compute_frame_state
from .types import FrameState


logger = logging.getLogger(__name__)


class FrameSurface(ABC):
    """Anything that turns a frame snapshot into output (pixels, files, a socket)."""

    @abstractmethod
    def draw(self, frame_index: int, state: FrameState) -> str:  # pragma: no cover - interface
        """Consume one frame and return a reference to what was produced."""
        raise NotImplementedError


class JsonFrameSurface(FrameSurface):
    def __init__(self, output_dir: str, indent: Optional[int] = None) -> None:
        self.output_dir = output_dir
        self.indent = indent

    def draw(self, frame_index: int, state: FrameState) -> str:
        _ensure_dir(self.output_dir)
        frame_path = os.path.join(self.output_dir, f"frame_{frame_index:06d}.json")
        with open(frame_path, "w", encoding="utf-8") as f:
            f.write(state.to_json(indent=self.indent))
        return frame_path


@dataclass
class RenderResult:
    total_frames: int
    outputs: List[str] = field(default_factory=list)


def _ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def iter_frame_states(facade: Facade) -> Iterator[Tuple[int, FrameState]]:
    fps = facade.timeline.fps
    for frame_index in range(facade.timeline.total_frames()):
        yield frame_index, compute_frame_state(facade, frame_index / fps)


def render_scene(
    facade: Facade,
    surface: FrameSurface,
    on_progress: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
) -> RenderResult:
    total = facade.timeline.total_frames()
    if total == 0:
        logger.warning("Timeline is empty; nothing to render")
        return RenderResult(total_frames=0)

    outputs: List[str] = []
    frames = iter_frame_states(facade)
    for frame_index, state in tqdm(frames, total=total, desc="Rendering", disable=not show_progress):
        outputs.append(surface.draw(frame_index, state))
        if on_progress is not None:
            on_progress(frame_index + 1, total)

    logger.info("Rendered %d frames (%.2fs at %d fps)", total, facade.timeline.total_duration(), facade.timeline.fps)
    return RenderResult(total_frames=total, outputs=outputs)
