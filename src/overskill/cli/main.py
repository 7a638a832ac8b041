"""CLI for overskill: build and inspect a cache-optimized system prompt."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from overskill.core.config import AppSettings, ObservabilityConfig, TrackerConfig
from overskill.hooks.logging_config import setup_logging
from overskill.prompt_cache import (
    AssemblyStrategy,
    BuildContext,
    PromptCacheBuilder,
    SourceFile,
    to_system_blocks,
)
from overskill.prompt_cache.wire import ttl_map_from_settings
from overskill.tracking import create_stability_tracker

app = typer.Typer(name="overskill-prompt", help="Cache-optimized system prompt assembly")
console = Console()

SKIP_DIRS = frozenset({".git", "node_modules", "dist", "build", ".next", "__pycache__"})
MAX_FILE_BYTES = 512_000
TRACKER_BACKENDS = ("none", "memory", "redis")


def load_source_files(root: Path) -> list[SourceFile]:
    """Read every UTF-8 text file under ``root``, skipping build and VCS dirs."""
    files: list[SourceFile] = []
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root)
        if any(part in SKIP_DIRS for part in rel.parts):
            continue
        if not path.is_file() or path.stat().st_size > MAX_FILE_BYTES:
            continue
        try:
            content = path.read_text(encoding="utf-8")
        except (UnicodeDecodeError, OSError):
            continue
        files.append(SourceFile(path=rel.as_posix(), content=content))
    return files


@app.callback()
def main() -> None:
    """Cache-optimized system prompt assembly."""


def _load_context(context_file: Optional[Path]) -> dict[str, Any]:
    if context_file is None:
        return {}
    raw = json.loads(context_file.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise typer.BadParameter(f"Expected JSON object in {context_file}")
    return raw


@app.command()
def build(
    root: Path = typer.Argument(..., exists=True, file_okay=False, help="Generated app directory"),
    instructions: Optional[Path] = typer.Option(None, "--instructions", "-i", help="Base instructions file"),
    context_file: Optional[Path] = typer.Option(None, "--context", "-c", help="JSON context map"),
    strategy: str = typer.Option("auto", help="auto, coarse or granular"),
    tracker: str = typer.Option(
        "none", help="Stability tracker backend: none, memory or redis (memory starts empty each run)"
    ),
    scope: str = typer.Option("default", help="Tracker scope (app id)"),
    as_json: bool = typer.Option(False, "--json", help="Print provider system blocks as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Assemble the system prompt for the app under ROOT."""
    settings = AppSettings()
    setup_logging(ObservabilityConfig(log_level="DEBUG") if verbose else settings.observability)

    if strategy not in ("auto", "coarse", "granular"):
        raise typer.BadParameter(f"Unknown strategy {strategy!r}")
    if tracker not in TRACKER_BACKENDS:
        raise typer.BadParameter(f"Unknown tracker backend {tracker!r}")

    ctx = BuildContext(
        base_instructions=instructions.read_text(encoding="utf-8") if instructions else "",
        files=load_source_files(root),
        context_map=_load_context(context_file),
        stability_source=create_stability_tracker(TrackerConfig(backend=tracker), scope=scope),
    )

    forced = None if strategy == "auto" else AssemblyStrategy(strategy)
    result = PromptCacheBuilder(settings=settings).build_result(ctx, strategy=forced)

    if as_json:
        blocks = to_system_blocks(result.segments, ttl_map_from_settings(settings))
        typer.echo(json.dumps(blocks, indent=2))
        return

    table = Table(title=f"System prompt ({result.strategy.value}, {result.classification_source})")
    table.add_column("#", justify="right")
    table.add_column("Retention")
    table.add_column("Chars", justify="right")
    table.add_column("Preview")
    for idx, seg in enumerate(result.segments, start=1):
        preview = seg.text.strip().splitlines()[0][:60] if seg.text.strip() else ""
        table.add_row(str(idx), seg.retention.name, str(len(seg.text)), preview)
    console.print(table)

    summary = result.summary
    console.print(
        f"[bold]{summary.total_tokens}[/bold] est. tokens, "
        f"{summary.cacheable_fraction:.0%} cacheable, "
        f"{summary.cached_segment_count}/{summary.segment_count} segments cached"
    )


if __name__ == "__main__":
    app()
