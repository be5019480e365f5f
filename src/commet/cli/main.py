"""Main CLI entry point for Commet."""

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from commet import __version__
from commet.constants import EXIT_DATA_ERROR, EXIT_SYSTEM_ERROR, EXIT_USER_ERROR
from commet.core import Repository
from commet.errors import CommetError, CorruptStateError, NotInitializedError, WriteError
from commet.logging_config import configure_logging

console = Console()
app = typer.Typer(
    name="commet",
    help="Commet - a simple local version control tool",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help", "-help"]},
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"Commet version: {__version__}")
        raise typer.Exit()


def _fail(error: CommetError) -> NoReturn:
    """Print a core error and exit with the matching code."""
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}", style="red")

    if isinstance(error, NotInitializedError):
        console.print(
            "\nRun [bold]commet init[/bold] to initialize a repository",
            style="yellow",
        )

    if isinstance(error, CorruptStateError):
        raise typer.Exit(EXIT_DATA_ERROR)
    if isinstance(error, WriteError):
        raise typer.Exit(EXIT_SYSTEM_ERROR)
    raise typer.Exit(EXIT_USER_ERROR)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version information and exit",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log debug output to stderr",
    ),
) -> None:
    """Commet - a simple local version control tool."""
    configure_logging("DEBUG" if verbose else None)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command()
def version() -> None:
    """Show Commet version."""
    typer.echo(f"Commet version: {__version__}")


@app.command()
def init(
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress output except errors",
    ),
) -> None:
    """Initialize a repository in the current directory."""
    repo = Repository(Path.cwd())

    try:
        repo.init()
    except CommetError as e:
        _fail(e)

    if not quiet:
        console.print(f"Initialized empty repository in {escape(str(repo.root))}")


@app.command()
def add(
    path: str = typer.Argument(..., help="File to stage"),
) -> None:
    """Stage a file."""
    repo = Repository(Path.cwd())

    try:
        entry = repo.add(path)
    except CommetError as e:
        _fail(e)

    console.print(f"Added {escape(entry.path)} to staging area")


@app.command()
def commit(
    message: Optional[str] = typer.Argument(None, help="Commit message"),
    message_option: Optional[str] = typer.Option(
        None,
        "--message",
        "-m",
        help="Commit message (alternative to the positional argument)",
    ),
) -> None:
    """Commit staged changes."""
    message = message if message is not None else message_option
    if not message:
        console.print(
            "[bold red]Error:[/bold red] Commit message is required",
            style="red",
        )
        console.print(
            "  Use [bold]commet commit \"your message\"[/bold] to provide a commit message",
            style="yellow",
        )
        raise typer.Exit(EXIT_USER_ERROR)

    repo = Repository(Path.cwd())

    try:
        new_commit = repo.commit(message)
    except CommetError as e:
        _fail(e)

    console.print(f"Commit successful: {escape(message)}")
    console.print(
        f"  [dim]{new_commit.hash[:7]}  {len(new_commit.files)} file(s)[/dim]"
    )


@app.command()
def status() -> None:
    """Show the status of the staging area."""
    repo = Repository(Path.cwd())

    try:
        staged = repo.status()
    except CommetError as e:
        _fail(e)

    if not staged:
        console.print("No changes staged.")
        return

    console.print("[bold green]Changes staged:[/bold green]")
    for entry in staged:
        console.print(f"- {escape(entry.path)}  [dim]({entry.content_hash[:8]})[/dim]")


@app.command()
def log(
    max_count: Optional[int] = typer.Option(
        None,
        "--max-count",
        "-n",
        min=1,
        help="Limit number of commits to show",
    ),
    oneline: bool = typer.Option(
        False,
        "--oneline",
        help="Show each commit on a single line",
    ),
) -> None:
    """Show commit history, newest first."""
    repo = Repository(Path.cwd())

    try:
        commits = repo.log(limit=max_count)
    except CommetError as e:
        _fail(e)

    if not commits:
        console.print("[dim]No commits yet[/dim]")
        return

    for i, entry in enumerate(commits):
        if oneline:
            first_line = entry.message.split("\n")[0]
            console.print(f"[yellow]{entry.hash[:7]}[/yellow] {escape(first_line)}")
            continue

        console.print(f"[bold yellow]commit {entry.hash}[/bold yellow]")
        console.print(f"[bold]Date:[/bold]   {entry.timestamp}")
        console.print()
        for line in entry.message.split("\n"):
            console.print(f"    {escape(line)}")

        if i < len(commits) - 1:
            console.print()


@app.command()
def show(
    commit_hash: str = typer.Argument(..., help="Full commit hash"),
) -> None:
    """Show a single commit and the files it recorded."""
    repo = Repository(Path.cwd())

    try:
        entry = repo.show(commit_hash)
    except CommetError as e:
        _fail(e)

    console.print(f"[bold yellow]commit {entry.hash}[/bold yellow]")
    console.print(f"[bold]Date:[/bold]   {entry.timestamp}")
    console.print()
    for line in entry.message.split("\n"):
        console.print(f"    {escape(line)}")
    console.print()

    if entry.files:
        console.print("[bold]Files:[/bold]")
        for path in entry.files:
            console.print(f"  {escape(path)}")
    else:
        console.print("[dim](no files recorded)[/dim]")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
