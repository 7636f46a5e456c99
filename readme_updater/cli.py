"""CLI entry point for readme-updater."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import structlog
import typer
import yaml
from github import GithubException
from rich import print as rprint
from rich.logging import RichHandler
from rich.panel import Panel
from rich.syntax import Syntax

from readme_updater.config import ReadmeUpdaterConfig, load_config, resolve_credentials
from readme_updater.config.loader import DEFAULT_CONFIG_TEMPLATE
from readme_updater.generation import (
    GenerationRequest,
    GenerationResult,
    GenerationSettings,
    ReadmeGenerator,
    SizeClass,
)
from readme_updater.llm import GenerationError, create_adapters, resolve_provider
from readme_updater.output import ReadmeStore
from readme_updater.vcs import (
    create_history_provider,
    format_commit_log,
    generate_diff_summary,
    select_commit_range,
)

app = typer.Typer(
    name="readme-updater",
    help="Regenerate a project's README from recent commit history with an LLM.",
)

config_app = typer.Typer(help="Manage readme-updater configuration.")
app.add_typer(config_app, name="config")

CONFIG_FILENAME = "readme-updater.yaml"

# Global state
_config: ReadmeUpdaterConfig | None = None

_LOG_LEVELS = {"debug": logging.DEBUG, "info": logging.INFO, "warn": logging.WARNING, "error": logging.ERROR}


def _get_config() -> ReadmeUpdaterConfig:
    if _config is None:
        return load_config()
    return _config


def _json_formatter() -> logging.Formatter:
    """structlog formatter rendering stdlib records as one JSON object per line."""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )


def _configure_logging(cfg: ReadmeUpdaterConfig) -> None:
    """Attach a single handler to the root logger per log_level/log_format."""
    if cfg.log_format == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(_json_formatter())
    else:
        handler = RichHandler(show_path=False, rich_tracebacks=True)
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(_LOG_LEVELS[cfg.log_level])


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help=f"Path to {CONFIG_FILENAME}")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _configure_logging(_config)


async def _run_update(
    cfg: ReadmeUpdaterConfig,
    workspace: Path,
    current: str,
    request_provider: str,
    size: SizeClass,
    from_sha: str | None,
    to_sha: str | None,
) -> GenerationResult:
    """Fetch history, build the request, and run the generator in one event loop."""
    history = create_history_provider(cfg.vcs, workspace)
    commits = await history.get_commit_history(cfg.vcs.commit_limit)
    older, latest, in_range = select_commit_range(commits, from_sha, to_sha)
    rprint(
        f"[dim]Comparing[/dim] {older.short_sha} ({older.summary}) "
        f"[dim]→[/dim] {latest.short_sha} ({latest.summary})"
    )
    changes = await history.get_code_changes(older.sha, latest.sha)

    request = GenerationRequest(
        current_document=current,
        change_summary=f"{generate_diff_summary(changes)}\n\n{changes}",
        history_log=format_commit_log(in_range),
        provider=resolve_provider(request_provider),
        size_class=size,
    )
    generator = ReadmeGenerator(
        adapters=create_adapters(cfg.llm),
        settings=GenerationSettings(
            completion_max_tokens=cfg.llm.completion_max_tokens,
            max_continuations=cfg.llm.max_continuations,
        ),
    )
    return await generator.generate(request, resolve_credentials(cfg.llm))


@app.command()
def update(
    workspace: str = typer.Argument(".", help="Workspace containing the git checkout"),
    provider: Annotated[
        str | None, typer.Option("--provider", "-p", help="claude | chatgpt | gemini")
    ] = None,
    size: Annotated[
        str | None, typer.Option("--size", "-s", help="small | medium | large")
    ] = None,
    from_sha: Annotated[
        str | None, typer.Option("--from", help="Older commit of the range (default: oldest listed)")
    ] = None,
    to_sha: Annotated[
        str | None, typer.Option("--to", help="Latest commit of the range (default: newest)")
    ] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Write without asking")] = False,
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without writing"),
) -> None:
    """Regenerate README.md from the commits between two points in history."""
    cfg = _get_config()
    root = Path(workspace).resolve()

    try:
        store = ReadmeStore(root, cfg.output.readme_path)
        size_class = SizeClass(size or cfg.llm.size)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    current = store.read()
    llm_name = provider or cfg.llm.provider
    action = "Updating" if current.strip() else "Generating new"
    rprint(f"[bold]{action}[/bold] {store.path.name} (llm: {llm_name}, size: {size_class.value})...")

    try:
        result = asyncio.run(
            _run_update(cfg, root, current, llm_name, size_class, from_sha, to_sha)
        )
    except (GenerationError, ValueError) as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except GithubException as e:
        rprint(f"[red]GitHub error:[/red] {e.status} {e.data}")
        raise typer.Exit(1)

    _display_result(store, current, result)

    if not dry_run:
        approved = yes or cfg.output.auto_approve or typer.confirm(
            f"Write {store.path.name}?", default=False
        )
        if not approved:
            rprint("[yellow]Discarded.[/yellow]")
            raise typer.Exit(0)

    dest = store.write(result.document_content, dry_run=dry_run)
    if dry_run:
        rprint(f"[yellow](dry run: would write {dest})[/yellow]")
    else:
        rprint(f"[green]Written:[/green] {dest}")


def _display_result(store: ReadmeStore, current: str, result: GenerationResult) -> None:
    footer = f"\n\n[dim]Provider:[/dim] {result.provider.value}"
    if result.continuations:
        footer += f"   [dim]Continuation rounds:[/dim] {result.continuations}"
    rprint(Panel(result.change_description + footer, title="Proposed Changes", border_style="blue"))

    if current:
        diff = store.diff(current, result.document_content)
        rprint(Syntax(diff or "(no changes)", "diff", theme="monokai"))
    else:
        rprint(Syntax(result.document_content, "markdown", theme="monokai"))


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default readme-updater.yaml in current directory."""
    target = Path(CONFIG_FILENAME)
    if target.exists() and not force:
        rprint(f"[yellow]{CONFIG_FILENAME} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
