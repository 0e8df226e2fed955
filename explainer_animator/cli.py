from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import typer
from rich import print, print_json
from rich.logging import RichHandler
from rich.table import Table

from .config import AppConfig, load_config
from .facade import Facade
from .frame import compute_frame_state
from .renderer import JsonFrameSurface, render_scene
from .scenes import SCENES, build_scene
from .techniques import TECHNIQUES
from .themes import THEMES, get_theme
from .voice import AudioClip, WordRateBackend, assemble_audio_track, resolve_with_backend


app = typer.Typer(add_completion=False, no_args_is_help=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


def _load_scene(
    scene: Optional[str],
    cfg: Optional[AppConfig],
    prefer_config: bool,
    fps: Optional[int],
    theme: Optional[str],
    voice: bool,
    seconds_per_word: Optional[float],
) -> Tuple[Facade, List[AudioClip]]:
    def choose(val, cfg_val):
        if prefer_config and cfg_val is not None:
            return cfg_val
        return val if val is not None else cfg_val

    scene = choose(scene, cfg.scene if cfg else None) or "demo"
    theme = choose(theme, cfg.theme if cfg else None) or "dark"
    settings = cfg.scene_settings() if cfg else AppConfig().scene_settings()
    fps = choose(fps, cfg.fps if cfg else None)
    if fps is not None:
        if fps <= 0:
            raise typer.BadParameter("fps must be positive")
        settings = settings.model_copy(update={"fps": fps})

    try:
        m = build_scene(scene, settings=settings, theme=get_theme(theme))
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    clips: List[AudioClip] = []
    if choose(True if voice else None, cfg.resolve_voice if cfg else None):
        rate = choose(seconds_per_word, cfg.seconds_per_word if cfg else None) or 0.3
        backend = WordRateBackend(seconds_per_word=rate, sample_rate=settings.sample_rate)
        m.set_voice(backend)
        clips = resolve_with_backend(m)
    return m, clips


SceneOption = typer.Option(None, help="Built-in scene: " + ", ".join(SCENES.keys()))
ConfigOption = typer.Option(None, help="Path to YAML config")
PreferConfigOption = typer.Option(False, help="If true, config overrides CLI when set")
FpsOption = typer.Option(None, help="Frames per second")
ThemeOption = typer.Option(None, help="Theme: " + ", ".join(THEMES.keys()))
VoiceOption = typer.Option(False, "--voice", help="Resolve narration with the offline word-rate voice")
RateOption = typer.Option(None, help="Offline voice speed in seconds per word")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Debug logging")


@app.command()
def info(
    scene: Optional[str] = SceneOption,
    config: Optional[str] = ConfigOption,
    prefer_config: bool = PreferConfigOption,
    fps: Optional[int] = FpsOption,
    voice: bool = VoiceOption,
    seconds_per_word: Optional[float] = RateOption,
    verbose: bool = VerboseOption,
):
    """Print the scene's timeline, segment by segment."""
    _setup_logging(verbose)
    cfg = load_config(config) if config else None
    m, _ = _load_scene(scene, cfg, prefer_config, fps, None, voice, seconds_per_word)
    timeline = m.timeline

    table = Table(title="Timeline")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Start", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Detail")
    start = 0.0
    for i, seg in enumerate(timeline.segments):
        detail = getattr(seg, "text", None) or getattr(seg, "name", None) or getattr(seg, "path", "")
        table.add_row(str(i), seg.kind, f"{start:.2f}", f"{seg.duration:.2f}", detail)
        start += seg.duration
    print(table)
    print(
        f"[bold green]{timeline.total_duration():.2f}s[/bold green] "
        f"across {timeline.total_frames()} frames at {timeline.fps} fps, "
        f"{len(m.elements)} elements, {len(m.animations)} animations"
    )


@app.command()
def frame(
    time: float = typer.Option(0.0, help="Timestamp in seconds"),
    scene: Optional[str] = SceneOption,
    config: Optional[str] = ConfigOption,
    prefer_config: bool = PreferConfigOption,
    fps: Optional[int] = FpsOption,
    theme: Optional[str] = ThemeOption,
    voice: bool = VoiceOption,
    seconds_per_word: Optional[float] = RateOption,
    verbose: bool = VerboseOption,
):
    """Print the frame state at one instant as JSON."""
    _setup_logging(verbose)
    cfg = load_config(config) if config else None
    m, _ = _load_scene(scene, cfg, prefer_config, fps, theme, voice, seconds_per_word)
    print_json(compute_frame_state(m, time).to_json())


@app.command()
def render(
    output_dir: Optional[str] = typer.Option(None, help="Directory to write frame JSON files"),
    scene: Optional[str] = SceneOption,
    config: Optional[str] = ConfigOption,
    prefer_config: bool = PreferConfigOption,
    fps: Optional[int] = FpsOption,
    theme: Optional[str] = ThemeOption,
    voice: bool = VoiceOption,
    seconds_per_word: Optional[float] = RateOption,
    verbose: bool = VerboseOption,
):
    """Write one frame-state JSON file per output frame."""
    _setup_logging(verbose)
    cfg: Optional[AppConfig] = load_config(config) if config else None
    if prefer_config and cfg and cfg.output_dir:
        output_dir = cfg.output_dir
    output_dir = output_dir or (cfg.output_dir if cfg else None) or "./frames"

    m, clips = _load_scene(scene, cfg, prefer_config, fps, theme, voice, seconds_per_word)
    result = render_scene(m, JsonFrameSurface(output_dir))
    if result.total_frames == 0:
        print("[red]Scene has no timeline segments; nothing rendered.[/red]")
        raise typer.Exit(code=1)

    track = assemble_audio_track(m.timeline, m.settings.sample_rate, clips)
    print(f"[bold green]Done.[/bold green] Wrote {result.total_frames} frames to {output_dir}")
    print(f"Audio track: {track.duration:.2f}s at {track.sample_rate} Hz")


@app.command()
def techniques():
    """List the built-in animation techniques."""
    table = Table(title="Techniques")
    table.add_column("Name")
    table.add_column("Default duration", justify="right")
    for name, factory in TECHNIQUES.items():
        table.add_row(name, f"{factory().duration:.2f}s")
    print(table)


@app.command()
def theme(name: str = typer.Argument("dark", help="Theme: " + ", ".join(THEMES.keys()))):
    """Print a theme's CSS custom properties."""
    try:
        selected = get_theme(name)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    rows: List[str] = [f"{key}: {value};" for key, value in selected.to_css_properties()]
    print(f"[bold]{selected.name}[/bold] ({len(rows)} properties)")
    for row in rows:
        typer.echo(row)


if __name__ == "__main__":
    app()
