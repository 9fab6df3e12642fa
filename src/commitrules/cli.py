"""commitrules CLI — Typer application with check, rules, install, and init commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from commitrules import __version__

app = typer.Typer(
    name="commitrules",
    help="Validate commit messages against a declarative rule set.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from commitrules.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


def _config_root() -> Path:
    """Repo root when inside a git repository, otherwise the working directory."""
    from commitrules.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError:
        return Path.cwd()


def _load_engine(config: Optional[str], verbose: bool):
    """Load config and build the engine, exit 2 on configuration errors."""
    from commitrules.config.loader import load_config
    from commitrules.rules.models import ConfigurationError
    from commitrules.rules.registry import build_engine

    root = _config_root()
    try:
        cfg = load_config(root, config)
        engine = build_engine(cfg, root)
    except ConfigurationError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    if verbose:
        console.print(f"[dim]Config root: {root}[/dim]")
        console.print(f"[dim]Rules enabled: {len(engine.enabled_rules)}[/dim]")
    return cfg, engine


def _read_message(file: Optional[Path], message: Optional[str]) -> str:
    if message is not None:
        return message
    if file is not None and str(file) != "-":
        try:
            return file.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            console.print(f"[bold red]Error:[/bold red] cannot read {file}: {escape(str(exc))}")
            raise typer.Exit(code=2) from exc
    if sys.stdin.isatty():
        console.print("[bold red]Error:[/bold red] no commit message given (FILE, -m, or stdin)")
        raise typer.Exit(code=2)
    return sys.stdin.read()


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    file: Optional[Path] = typer.Argument(None, help="Commit message file, e.g. .git/COMMIT_EDITMSG ('-' for stdin)"),
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Commit message text"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .commitrules.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    fail_on_warnings: bool = typer.Option(False, "--fail-on-warnings", help="Exit 1 on warnings too"),
    show_passed: bool = typer.Option(False, "--show-passed", help="Also list rules that passed"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging"),
) -> None:
    """Validate a commit message (file, --message, or stdin)."""
    from commitrules.config.schema import OUTPUT_FORMATS
    from commitrules.message.parser import parse_commit_message, strip_comments
    from commitrules.output import json_report, terminal
    from commitrules.rules.models import ConfigurationError

    _configure_logging(debug)
    cfg, engine = _load_engine(config, verbose or debug)

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if fail_on_warnings:
        cfg.lint.fail_on_warnings = True
    if show_passed:
        cfg.output.show_passed = True

    parsed = parse_commit_message(strip_comments(_read_message(file, message)))

    try:
        result = engine.evaluate(parsed)
    except ConfigurationError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    if cfg.output.format == "json":
        print(json_report.render(result, show_passed=cfg.output.show_passed))
    else:
        terminal.render(
            result,
            header=parsed.header,
            show_passed=cfg.output.show_passed,
            fail_on_warnings=cfg.lint.fail_on_warnings,
            console=console,
        )

    # --- Exit code ---
    if result.has_errors or (cfg.lint.fail_on_warnings and result.has_warnings):
        raise typer.Exit(code=1)
    raise typer.Exit(code=0)


# ── rules ─────────────────────────────────────────────────────────────────────


def _format_parameter(value) -> str:
    if callable(value):
        return value.__name__
    if isinstance(value, frozenset):
        value = sorted(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_format_parameter(v) for v in value) + "]"
    return str(value)


@app.command()
def rules(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .commitrules.toml"),
) -> None:
    """List the effective rule set."""
    _, engine = _load_engine(config, verbose=False)

    table = Table(title="commitrules rules", title_style="bold", border_style="dim")
    table.add_column("Rule", style="cyan")
    table.add_column("Kind")
    table.add_column("Severity")
    table.add_column("Parameters", style="dim")

    for spec in engine.rules:
        params = ", ".join(f"{k}={_format_parameter(v)}" for k, v in spec.parameters.items())
        table.add_row(spec.name, spec.kind, spec.severity.value, escape(params))

    Console().print(table)


# ── install ───────────────────────────────────────────────────────────────────


@app.command()
def install(
    force: bool = typer.Option(False, "--force", help="Overwrite existing commit-msg hook"),
) -> None:
    """Install commitrules as a git commit-msg hook."""
    from commitrules.hooks.installer import install_hook

    repo_root = _resolve_repo_root()
    success, msg = install_hook(repo_root, force=force)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── uninstall ─────────────────────────────────────────────────────────────────


@app.command()
def uninstall() -> None:
    """Remove the commitrules commit-msg hook."""
    from commitrules.hooks.installer import uninstall_hook

    repo_root = _resolve_repo_root()
    success, msg = uninstall_hook(repo_root)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    full: bool = typer.Option(False, "--full", help="Include commented examples for custom rules"),
) -> None:
    """Generate a starter .commitrules.toml in the repo root."""
    from commitrules.config.defaults import DEFAULT_TOML, FULL_TOML
    from commitrules.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    template = FULL_TOML if full else DEFAULT_TOML
    config_path.write_text(template, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"commitrules {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """commitrules — validate commit messages against a declarative rule set."""
