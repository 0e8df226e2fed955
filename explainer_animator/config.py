from __future__ import annotations

from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field

from .timeline import DEFAULT_FPS


DEFAULT_WPM = 150.0
BEAT_DURATION = 0.3
BREATH_DURATION = 0.8
DEFAULT_SAMPLE_RATE = 48000


class SceneSettings(BaseModel):
    """Authoring defaults handed to a Facade at construction."""

    fps: int = Field(DEFAULT_FPS, gt=0)
    words_per_minute: float = Field(DEFAULT_WPM, gt=0)
    beat_duration: float = Field(BEAT_DURATION, ge=0)
    breath_duration: float = Field(BREATH_DURATION, ge=0)
    sample_rate: int = Field(DEFAULT_SAMPLE_RATE, gt=0)


class AppConfig(BaseModel):
    scene: Optional[str] = None
    fps: Optional[int] = Field(None, gt=0)
    words_per_minute: Optional[float] = Field(None, gt=0)
    beat_duration: Optional[float] = Field(None, ge=0)
    breath_duration: Optional[float] = Field(None, ge=0)
    sample_rate: Optional[int] = Field(None, gt=0)
    theme: Optional[Literal["dark", "light"]] = None
    output_dir: Optional[str] = None
    seconds_per_word: Optional[float] = Field(None, gt=0)
    resolve_voice: Optional[bool] = None

    def scene_settings(self) -> SceneSettings:
        overrides = {
            key: value
            for key, value in self.model_dump().items()
            if key in SceneSettings.model_fields and value is not None
        }
        return SceneSettings(**overrides)


def load_config(path: str) -> AppConfig:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return AppConfig(**data)
