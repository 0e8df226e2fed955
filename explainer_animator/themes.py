from __future__ import annotations

from typing import Callable, Dict, List, Tuple

from pydantic import BaseModel, Field


CSS_PREFIX = "--explainer-"


class ThemeColors(BaseModel):
    bg_primary: str = "#0f172a"
    bg_secondary: str = "#1e293b"
    bg_tertiary: str = "#334155"
    fg_primary: str = "#f8fafc"
    fg_secondary: str = "#cbd5e1"
    fg_muted: str = "#64748b"
    accent: str = "#3b82f6"
    accent_hover: str = "#60a5fa"
    accent_subtle: str = "rgba(59, 130, 246, 0.15)"
    success: str = "#22c55e"
    warning: str = "#eab308"
    error: str = "#ef4444"


class ThemeTypography(BaseModel):
    font_sans: str = '"Inter", ui-sans-serif, system-ui, sans-serif'
    font_mono: str = '"JetBrains Mono", ui-monospace, monospace'
    text_xs: str = "0.75rem"
    text_sm: str = "0.875rem"
    text_base: str = "1rem"
    text_lg: str = "1.25rem"
    text_xl: str = "1.5rem"
    text_2xl: str = "2rem"
    text_3xl: str = "2.5rem"
    text_4xl: str = "3.5rem"
    leading_tight: str = "1.15"
    leading_normal: str = "1.5"
    leading_relaxed: str = "1.75"
    font_weight_normal: str = "400"
    font_weight_medium: str = "500"
    font_weight_semibold: str = "600"
    font_weight_bold: str = "700"


class ThemeSpacing(BaseModel):
    space_1: str = "0.25rem"
    space_2: str = "0.5rem"
    space_3: str = "0.75rem"
    space_4: str = "1rem"
    space_6: str = "1.5rem"
    space_8: str = "2rem"
    space_12: str = "3rem"
    space_16: str = "4rem"
    space_24: str = "6rem"
    container_padding: str = "3rem"
    radius_sm: str = "0.25rem"
    radius_md: str = "0.5rem"
    radius_lg: str = "1rem"
    radius_full: str = "9999px"


class ThemeTiming(BaseModel):
    duration_instant: str = "0ms"
    duration_fast: str = "150ms"
    duration_normal: str = "300ms"
    duration_slow: str = "500ms"
    duration_slower: str = "800ms"
    ease_default: str = "cubic-bezier(0.4, 0, 0.2, 1)"
    ease_in: str = "cubic-bezier(0.4, 0, 1, 1)"
    ease_out: str = "cubic-bezier(0, 0, 0.2, 1)"
    ease_in_out: str = "cubic-bezier(0.4, 0, 0.2, 1)"
    ease_spring: str = "cubic-bezier(0.34, 1.56, 0.64, 1)"


class ThemeShadows(BaseModel):
    shadow_sm: str = "0 1px 2px rgba(0, 0, 0, 0.3)"
    shadow_md: str = "0 4px 6px rgba(0, 0, 0, 0.3)"
    shadow_lg: str = "0 10px 15px rgba(0, 0, 0, 0.4)"


class Theme(BaseModel):
    """Design tokens handed to the rendering surface as CSS custom properties.

    Every token becomes ``--explainer-<group field with dashes>``, e.g.
    ``colors.bg_primary`` -> ``--explainer-bg-primary``.
    """

    name: str = Field("explainer-dark", min_length=1)
    colors: ThemeColors = Field(default_factory=ThemeColors)
    typography: ThemeTypography = Field(default_factory=ThemeTypography)
    spacing: ThemeSpacing = Field(default_factory=ThemeSpacing)
    timing: ThemeTiming = Field(default_factory=ThemeTiming)
    shadows: ThemeShadows = Field(default_factory=ThemeShadows)

    @classmethod
    def dark(cls) -> Theme:
        return cls()

    @classmethod
    def light(cls) -> Theme:
        return cls(
            name="explainer-light",
            colors=ThemeColors(
                bg_primary="#ffffff",
                bg_secondary="#f1f5f9",
                bg_tertiary="#e2e8f0",
                fg_primary="#0f172a",
                fg_secondary="#334155",
                fg_muted="#94a3b8",
                accent="#2563eb",
                accent_hover="#1d4ed8",
                accent_subtle="rgba(37, 99, 235, 0.12)",
                success="#16a34a",
                warning="#ca8a04",
                error="#dc2626",
            ),
            shadows=ThemeShadows(
                shadow_sm="0 1px 2px rgba(15, 23, 42, 0.08)",
                shadow_md="0 4px 6px rgba(15, 23, 42, 0.1)",
                shadow_lg="0 10px 15px rgba(15, 23, 42, 0.12)",
            ),
        )

    def to_css_properties(self) -> List[Tuple[str, str]]:
        props: List[Tuple[str, str]] = []
        for group in (self.colors, self.typography, self.spacing, self.timing, self.shadows):
            for field_name in type(group).model_fields:
                key = CSS_PREFIX + field_name.replace("_", "-")
                props.append((key, getattr(group, field_name)))
        return props


THEMES: Dict[str, Callable[[], Theme]] = {
    "dark": Theme.dark,
    "light": Theme.light,
}


def get_theme(name: str) -> Theme:
    try:
        return THEMES[name]()
    except KeyError:
        raise ValueError(f"Unknown theme: {name} (choose from {', '.join(THEMES)})") from None
