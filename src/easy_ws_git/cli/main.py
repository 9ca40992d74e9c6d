"""Main CLI interface for easy-ws-git."""

import logging
from pathlib import Path
from typing import NoReturn, Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from easy_ws_git.core import workspace
from easy_ws_git.core.config import EasyWorkspaceConfig, load_config
from easy_ws_git.core.editor import SublimeEditor
from easy_ws_git.core.errors import EasyWorkspaceError
from easy_ws_git.core.repository import GitRepository
from easy_ws_git.core.review import ReviewWalker
from easy_ws_git.models.review import ReviewStep

console = Console()


class CliState:
    """Options shared by every command."""

    def __init__(self, repo_path: Path, config: EasyWorkspaceConfig):
        self.repo_path = repo_path
        self.config = config

    def open_repository(self) -> GitRepository:
        return GitRepository.discover(self.repo_path)

    def open_editor(self) -> SublimeEditor:
        return SublimeEditor(self.config.editor)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(error: Exception) -> NoReturn:
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    raise click.Abort() from error


@click.group()
@click.version_option(package_name="easy-ws-git")
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(file_okay=False),
    default=".",
    help="Path inside the git repository",
)
@click.option("--editor", help="Editor executable (overrides config)")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx: click.Context, repo_path: str, editor: Optional[str], verbose: bool):
    """easy-ws-git - EasyWorkspace integration for git branches."""
    _configure_logging(verbose)

    try:
        config = load_config()
    except EasyWorkspaceError as e:
        _fail(e)

    if editor:
        config = config.model_copy(update={"editor": editor})

    ctx.obj = CliState(Path(repo_path), config)


@main.command("workspace-name")
@click.argument("branch", required=False)
@click.pass_obj
def workspace_name(state: CliState, branch: Optional[str]):
    """Print the workspace filename of BRANCH (default: current branch)."""
    try:
        name = workspace.workspace_name(state.open_repository(), branch)
    except EasyWorkspaceError as e:
        _fail(e)
    click.echo(name)


@main.command()
@click.argument("branch", required=False)
@click.pass_obj
def edit(state: CliState, branch: Optional[str]):
    """Open the workspace of BRANCH in a new editor window."""
    try:
        name = workspace.edit(
            state.open_repository(),
            state.open_editor(),
            branch,
            config=state.config,
        )
    except EasyWorkspaceError as e:
        _fail(e)
    console.print(f"[green]Opened workspace [bold]{name}[/bold][/green]")


@main.command()
@click.argument("branch", required=False)
@click.pass_obj
def save(state: CliState, branch: Optional[str]):
    """Save the active editor window as the workspace of BRANCH."""
    try:
        name = workspace.save(
            state.open_repository(),
            state.open_editor(),
            branch,
            config=state.config,
        )
    except EasyWorkspaceError as e:
        _fail(e)
    console.print(f"[green]Saved workspace [bold]{name}[/bold][/green]")


def _print_step(step: ReviewStep) -> None:
    console.print(
        f"[bold]Reviewing {step.progress}:[/bold] "
        f"[yellow]{step.commit.short_hash}[/yellow] {step.commit.summary} "
        f"[dim]({len(step.changed_files)} file(s))[/dim]"
    )


@main.command()
@click.argument("refs", nargs=-1, metavar="TO_BRANCH FROM_BRANCH")
@click.pass_obj
def review(state: CliState, refs: Tuple[str, ...]):
    """Review the commits of FROM_BRANCH..TO_BRANCH one at a time.

    Each commit is checked out and its changed files are opened next to the
    commit message. Close the editor view to move on to the next commit.
    The starting branch is checked out again at the end.
    """
    try:
        walker = ReviewWalker(
            state.open_repository(),
            state.open_editor(),
            cleanup_scratch=state.config.cleanup_scratch,
            open_repo_window=state.config.open_repo_window,
            on_step=_print_step,
        )
        session = walker.review(*refs)
    except EasyWorkspaceError as e:
        _fail(e)

    if session.is_empty:
        console.print(
            f"[yellow]Nothing to review in "
            f"{session.from_ref}..{session.to_ref}[/yellow]"
        )
        return

    console.print(
        f"[green]✅ Reviewed {len(session.steps)} commit(s), "
        f"back on {session.start_ref}[/green]"
    )


if __name__ == "__main__":
    main()
