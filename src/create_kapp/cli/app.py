"""Typer CLI application for create-kapp."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import httpx
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from typer import Exit, Option, Typer

import create_kapp
from create_kapp.cli._prompts import ask_spec
from create_kapp.cli._scaffold import (
    ScaffoldRequest,
    fetch_and_extract,
    resolve_path,
    select_template,
)
from create_kapp.cli._terminal import Terminal, initialize
from create_kapp.cli._types import PromptKind, PromptSpec, Template
from create_kapp.config import Settings
from create_kapp.errors import (
    ArchiveError,
    DownloadError,
    ExtractionError,
    PathError,
    ScaffoldError,
    TerminalInitError,
)

app = Typer(add_completion=False, context_settings={"help_option_names": ["-h", "--help"]})
logger = logging.getLogger(__name__)

FOLDER_PROMPT = PromptSpec(
    "Setup the project in (specify folder)...?", validator=lambda value: len(value) > 0
)
TEMPLATE_PROMPT = PromptSpec("What scaffold do you want to start with?")
SUCCESS_MESSAGE = "Successfully set up project :D"

_FAILED_STEP: dict[type[ScaffoldError], str] = {
    TerminalInitError: "terminal setup",
    PathError: "directory resolution",
    DownloadError: "download",
    ArchiveError: "archive parsing",
    ExtractionError: "extraction",
}


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbose)],
        force=True,
    )


def run(terminal: Terminal, settings: Settings, client: httpx.Client | None = None) -> Path:
    """Ask for a folder and a scaffold, then download and unpack it there.

    Returns the resolved project directory. Workflow errors propagate to the
    caller untouched.
    """
    folder = ask_spec(terminal, PromptKind.INPUT, FOLDER_PROMPT)
    target = resolve_path(folder)

    choice = ask_spec(terminal, PromptKind.INPUT, TEMPLATE_PROMPT)
    template = select_template(choice)

    request = ScaffoldRequest(
        target=target,
        template=template,
        owner=settings.owner,
        branch=settings.branch,
    )
    fetch_and_extract(terminal, request, settings, client)

    terminal.write_line(f"[success]{SUCCESS_MESSAGE}[/]")
    return target


def _list_templates_callback(value: bool) -> None:
    if not value:
        return
    console = Console(highlight=False)
    for t in Template:
        marker = " [dim](default)[/]" if t is Template.default() else ""
        console.print(f"[bold cyan]{t.value:<16}[/] {t.label}{marker}")
    raise Exit()


def _version_callback(value: bool) -> None:
    if value:
        Console(highlight=False).print(f"create-kapp {create_kapp.__version__}")
        raise Exit()


@app.command()
def main(
    verbose: Annotated[
        bool, Option("--verbose", "-v", help="Log each step to stderr.")
    ] = False,
    list_templates: Annotated[
        bool,
        Option(
            "--list-templates",
            "-l",
            help="List the known scaffolds and exit.",
            callback=_list_templates_callback,
            is_eager=True,
            expose_value=False,
        ),
    ] = False,
    version: Annotated[
        bool,
        Option(
            "--version",
            help="Show the version and exit.",
            callback=_version_callback,
            is_eager=True,
            expose_value=False,
        ),
    ] = False,
) -> None:
    """Scaffold a new project from a template archive."""
    configure_logging(verbose)
    terminal = Terminal()

    try:
        initialize()
        run(terminal, Settings())
    except ScaffoldError as exc:
        step = _FAILED_STEP.get(type(exc), "setup")
        logger.error("Project setup failed during %s", step, exc_info=verbose)
        terminal.write_line(f"[error]× {escape(str(exc))}[/]")
        raise Exit(code=1) from None
