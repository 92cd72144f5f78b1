"""CLI entry point for spriteatlas.

Usage:
    spriteatlas run --video clip.mov          # Convert a video into sprite pages
    spriteatlas run-step s00_probe_video -i '{"video_path": "clip.mov"}'
    spriteatlas info                          # Show pipeline steps
    spriteatlas plan 1280 720                 # Show the page grid for a source size
    spriteatlas locate data/processed/sprites/info.json 42
    spriteatlas play data/processed/sprites/info.json
"""

from __future__ import annotations

import math
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from spriteatlas.core.errors import SpriteAtlasError
from spriteatlas.core.logging import setup_logging

app = typer.Typer(name="spriteatlas", help="Video to sprite sheet conversion and playback")
console = Console()

DEFAULT_CONFIG = Path("configs/pipeline.yaml")


@app.command()
def run(
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    video: Path = typer.Option(None, "--video", "-v", help="Source video (overrides config inputs)"),
    log_level: str = typer.Option("INFO", help="Logging level"),
) -> None:
    """Run the full conversion pipeline."""
    setup_logging(log_level)
    from spriteatlas.core.pipeline_runner import run_pipeline

    overrides = {"video_path": str(video)} if video else None
    try:
        results = run_pipeline(config, overrides)
    except SpriteAtlasError as e:
        console.print(f"[red]Conversion failed: {e}[/red]")
        raise typer.Exit(1)

    written = results.get("write_manifest")
    if written is not None:
        console.print(f"[green]Manifest:[/green] {written.manifest_path}")


@app.command()
def run_step(
    step_name: str = typer.Argument(..., help="Step name (e.g. s00_probe_video)"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    input_json: str = typer.Option(None, "--input", "-i", help="Input as JSON string"),
    log_level: str = typer.Option("INFO", help="Logging level"),
) -> None:
    """Run a single pipeline step."""
    import json

    setup_logging(log_level)
    from spriteatlas.core.pipeline_runner import load_pipeline_config, import_step_class, load_step_config

    pipeline_cfg = load_pipeline_config(config)
    entry = next((s for s in pipeline_cfg.steps if s.name == step_name), None)
    if entry is None:
        console.print(f"[red]Step '{step_name}' not found in pipeline config[/red]")
        raise typer.Exit(1)

    step_cls = import_step_class(entry.module)
    step_config = load_step_config(Path(entry.config_file), step_cls.config_type)
    step_instance = step_cls(config=step_config, data_root=pipeline_cfg.data_root)

    input_data = dict(pipeline_cfg.inputs)
    if input_json:
        input_data.update(json.loads(input_json))
    else:
        schema = step_cls.input_type.model_json_schema()
        missing = [f for f in schema.get("required", []) if f not in input_data]
        if missing:
            console.print(f"[yellow]Step '{step_name}' requires input fields: {missing}[/yellow]")
            console.print("[yellow]Use --input/-i with JSON string, e.g.:[/yellow]")
            console.print(f'  spriteatlas run-step {step_name} -i \'{{"field": "value"}}\'')
            raise typer.Exit(1)

    console.print(f"[green]Running step: {step_name}[/green]")
    step_input = step_cls.input_type(**input_data)
    try:
        output = step_instance.execute(step_input)
    except SpriteAtlasError as e:
        console.print(f"[red]Step failed: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Done. Output:[/green] {output.model_dump_json(indent=2)}")


@app.command()
def info(config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path")) -> None:
    """Show pipeline steps."""
    from spriteatlas.core.pipeline_runner import load_pipeline_config

    pipeline_cfg = load_pipeline_config(config)
    table = Table(title=f"Pipeline: {pipeline_cfg.project_name}")
    table.add_column("#", style="dim")
    table.add_column("Step", style="cyan")
    table.add_column("Module", style="green")
    table.add_column("Enabled", style="yellow")
    table.add_column("Depends On", style="dim")

    for i, step in enumerate(pipeline_cfg.steps, 1):
        table.add_row(
            str(i),
            step.name,
            step.module,
            "Y" if step.enabled else "N",
            ", ".join(step.depends_on) if step.depends_on else "-",
        )
    console.print(table)


@app.command()
def plan(
    width: int = typer.Argument(..., help="Source video width"),
    height: int = typer.Argument(..., help="Source video height"),
    duration: float = typer.Option(1.0, help="Source duration in seconds"),
    frame_width: int = typer.Option(720, help="Target frame width"),
    page_width: int = typer.Option(1920, help="Maximum page width"),
    page_height: int = typer.Option(1080, help="Maximum page height"),
    fps: float = typer.Option(24.0, help="Extraction frames per second"),
) -> None:
    """Show the sprite page layout for a source size without converting."""
    from spriteatlas.atlas.layout import LayoutConstraints, plan as plan_layout
    from spriteatlas.core.contracts import VideoMetrics

    try:
        layout = plan_layout(
            VideoMetrics(width=width, height=height, duration=duration),
            LayoutConstraints(
                target_frame_width=frame_width,
                max_page_width=page_width,
                max_page_height=page_height,
                fps=fps,
            ),
        )
    except SpriteAtlasError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    pages = math.ceil(layout.estimated_frames / layout.capacity_per_page)
    table = Table(title=f"Layout for {width}x{height}")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("scale", f"{layout.scale:g}")
    table.add_row("frame", f"{layout.frame_width}x{layout.frame_height}")
    table.add_row("grid", f"{layout.columns}x{layout.rows}")
    table.add_row("frames per page", str(layout.capacity_per_page))
    table.add_row("estimated frames", str(layout.estimated_frames))
    table.add_row("estimated pages", str(pages))
    console.print(table)


@app.command()
def locate(
    manifest_path: Path = typer.Argument(..., help="Manifest (info.json) path"),
    frame: int = typer.Argument(..., help="Global frame index"),
) -> None:
    """Show where a frame lives in the sprite pages."""
    from spriteatlas.atlas.decoder import decode, source_rect
    from spriteatlas.atlas.manifest import read_manifest

    try:
        manifest = read_manifest(manifest_path)
        location = decode(frame, manifest)
    except (SpriteAtlasError, IndexError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    rect = source_rect(location, manifest)
    console.print(f"frame {frame}: page {location.page} ({manifest.page_filename(location.page)})")
    console.print(f"row {location.row}, column {location.column}")
    console.print(f"rect x={rect.x} y={rect.y} w={rect.width} h={rect.height}")


@app.command()
def play(
    manifest_path: Path = typer.Argument(..., help="Manifest (info.json) path"),
    fps: float = typer.Option(None, help="Playback rate (default: manifest fps)"),
    scale: float = typer.Option(1.0, help="Window scale factor"),
    log_level: str = typer.Option("INFO", help="Logging level"),
) -> None:
    """Play a converted sprite atlas in a window (space pauses, q quits)."""
    setup_logging(log_level)
    from spriteatlas.playback.config import PlaybackConfig
    from spriteatlas.playback.player import play as play_atlas

    try:
        play_atlas(manifest_path, PlaybackConfig(fps=fps, scale=scale))
    except SpriteAtlasError as e:
        console.print(f"[red]Playback failed: {e}[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
