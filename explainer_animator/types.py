from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContractModel(BaseModel):
    """Base for everything handed to a rendering surface (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TitleKind(ContractModel):
    type: Literal["title"] = "title"


class ShowKind(ContractModel):
    type: Literal["show"] = "show"


class SectionKind(ContractModel):
    type: Literal["section"] = "section"


class MetricKind(ContractModel):
    type: Literal["metric"] = "metric"
    direction: Literal["up", "down", "neutral"] = "neutral"


class StepsKind(ContractModel):
    type: Literal["steps"] = "steps"
    count: int = Field(0, ge=0)


ElementKind = Annotated[
    Union[TitleKind, ShowKind, SectionKind, MetricKind, StepsKind],
    Field(discriminator="type"),
]

HEADER_KINDS = (TitleKind, SectionKind)


class ItemState(ContractModel):
    text: str
    opacity: float = 1.0
    translate_x: float = 0.0
    translate_y: float = 0.0
    scale: float = 1.0
    rotation: float = 0.0


class ElementState(ContractModel):
    id: int
    kind: ElementKind
    content: str
    items: List[ItemState] = Field(default_factory=list)
    visible: bool
    opacity: float = Field(..., description="0.0 transparent, 1.0 opaque")
    translate_x: float = Field(0.0, description="Horizontal offset in pixels")
    translate_y: float = Field(0.0, description="Vertical offset in pixels")
    scale: float = 1.0
    rotation: float = Field(0.0, description="Rotation in degrees")
    layout_y: float = Field(0.5, description="Normalized vertical slot in [0,1]")


class ThemeState(ContractModel):
    name: str
    css_properties: Dict[str, str] = Field(default_factory=dict)


class FrameState(ContractModel):
    time: float
    frame: int
    total_duration: float
    fps: int
    elements: List[ElementState] = Field(default_factory=list)
    active_narration: Optional[str] = None
    theme: ThemeState

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

    def to_json(self, indent: Optional[int] = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)
