"""CLI entry point for dialogflow-intents.

Invoked as::

    dialogflow-intents [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m dialogflow_intents.cli.main

Commands
--------
- version  — Show version information
- import   — Build convo and utterance files from a Dialogflow agent
- export   — Merge utterance files back into a Dialogflow agent
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_caps(caps_file: str | None) -> dict[str, object]:
    from dialogflow_intents.config import load_caps
    from dialogflow_intents.errors import CapabilityError

    if caps_file is None:
        return {}
    try:
        return load_caps(caps_file)
    except CapabilityError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)


def _print_status(message: str, data: object = None) -> None:
    console.print(f"[yellow]{escape(message)}[/yellow]")


def _unique_stem(name: str, used: set[str]) -> str:
    """Filesystem-safe file stem for *name*, unique within *used*."""
    from dialogflow_intents.importers.base import slugify

    base = slugify(name) or "unnamed"
    stem = base
    counter = 1
    while stem in used:
        counter += 1
        stem = f"{base}-{counter}"
    used.add(stem)
    return stem


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Convert Dialogflow agents to test conversations and back."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from dialogflow_intents import __version__

    console.print(f"[bold]dialogflow-intents[/bold] v{__version__}")


# ---------------------------------------------------------------------------
# import
# ---------------------------------------------------------------------------


@cli.command(name="import")
@click.option(
    "--caps",
    "caps_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="JSON or YAML capabilities file (botium.json).",
)
@click.option(
    "--agentzip",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to the exported Dialogflow agent zip file. If not given, it is downloaded.",
)
@click.option("--buildconvos", is_flag=True, help="Build convo files with intent asserters.")
@click.option(
    "--buildmultistepconvos",
    is_flag=True,
    help="Reverse-engineer the agent and build multi-step convo files.",
)
@click.option(
    "--output-dir",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False),
    help="Directory to write convo and utterance files to.",
)
@click.option(
    "--format",
    "fmt",
    default="json",
    show_default=True,
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    help="Output document format.",
)
def import_command(
    caps_file: str | None,
    agentzip: str | None,
    buildconvos: bool,
    buildmultistepconvos: bool,
    output_dir: str,
    fmt: str,
) -> None:
    """Import intents from a Dialogflow agent as convo and utterance files."""
    from dialogflow_intents.errors import DialogflowIntentsError
    from dialogflow_intents.orchestrator import import_handler
    from dialogflow_intents.runtime.driver import CapabilityDriver

    caps = _load_caps(caps_file)
    try:
        driver = CapabilityDriver(caps, compiler_format=fmt.lower())  # type: ignore[arg-type]
        result = import_handler(
            buildconvos=buildconvos,
            buildmultistepconvos=buildmultistepconvos,
            agentzip=agentzip,
            status_callback=_print_status,
            driver=driver,
        )
    except DialogflowIntentsError as exc:
        console.print(f"[red]Import failed:[/red] {escape(str(exc))}")
        sys.exit(1)

    compiler = driver.build_compiler()
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)

    used: set[str] = set()
    for conversation in result.conversations:
        compiler.write_convo(conversation, directory, _unique_stem(conversation.name, used))
    used = set()
    for utterance_set in result.utterance_sets:
        compiler.write_utterances(utterance_set, directory, _unique_stem(utterance_set.name, used))

    table = Table(title="Dialogflow import", show_lines=False)
    table.add_column("Records", style="cyan")
    table.add_column("Count", justify="right")
    table.add_row("Conversations", str(len(result.conversations)))
    table.add_row("Utterance sets", str(len(result.utterance_sets)))
    console.print(table)
    console.print(f"[green]Written to:[/green] {directory}")


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------


@cli.command(name="export")
@click.option(
    "--caps",
    "caps_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="JSON or YAML capabilities file (botium.json).",
)
@click.option(
    "--agentzip",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to the exported Dialogflow agent zip file. If not given, it is downloaded.",
)
@click.option(
    "--output",
    default=None,
    type=click.Path(dir_okay=False),
    help="Path to the changed Dialogflow agent zip file. If not given, the agent is uploaded.",
)
@click.option(
    "--input-dir",
    required=True,
    type=click.Path(exists=True, file_okay=False),
    help="Directory holding *.utterances.json or *.utterances.yaml files.",
)
@click.option(
    "--format",
    "fmt",
    default="json",
    show_default=True,
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    help="Input document format.",
)
def export_command(
    caps_file: str | None,
    agentzip: str | None,
    output: str | None,
    input_dir: str,
    fmt: str,
) -> None:
    """Add new user examples from utterance files to a Dialogflow agent."""
    from dialogflow_intents.errors import DialogflowIntentsError
    from dialogflow_intents.orchestrator import export_handler
    from dialogflow_intents.runtime.driver import CapabilityDriver

    caps = _load_caps(caps_file)
    try:
        driver = CapabilityDriver(caps, compiler_format=fmt.lower())  # type: ignore[arg-type]
        utterance_sets = driver.build_compiler().read_utterance_files(Path(input_dir))
    except (DialogflowIntentsError, ValueError, OSError) as exc:
        console.print(f"[red]Failed to read input:[/red] {escape(str(exc))}")
        sys.exit(1)

    try:
        result = export_handler(
            utterance_sets,
            agentzip=agentzip,
            output=output,
            status_callback=_print_status,
            driver=driver,
        )
    except DialogflowIntentsError as exc:
        console.print(f"[red]Export failed:[/red] {escape(str(exc))}")
        sys.exit(1)

    added = sum(result.report.added.values())
    console.print(
        f"[green]Exported:[/green] {added} new examples in "
        f"{result.report.writes} intents -> {result.destination}"
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


if __name__ == "__main__":
    cli()
