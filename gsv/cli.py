from pathlib import Path

import click
import structlog

from gsv.config import Config, ConfigError, load_config
from gsv.git_ops import GitError, get_repo_root
from gsv.logs import configure_logging
from gsv.repo_data import RepoData
from gsv.summary_view import INDENTATION, SummaryView
from gsv.tui import run_tui

log = structlog.get_logger("gsv.cli")


class _NoDisplay:
    def update_display(self) -> None:
        pass


def _open_repo(path: Path) -> tuple[RepoData, Config]:
    repo_root = get_repo_root(path)
    if repo_root is None:
        click.echo("gsv: not inside a git repository", err=True)
        raise SystemExit(1)
    try:
        config = load_config(repo_root)
        repo_data = RepoData(repo_root)
        repo_data.load()
    except (ConfigError, GitError) as exc:
        raise click.ClickException(str(exc)) from exc
    log.debug("Opened repository", repo=str(repo_root), refresh_interval=config.refresh_interval)
    return repo_data, config


def _is_interactive() -> bool:
    return click.get_text_stream("stdin").isatty() and click.get_text_stream("stdout").isatty()


def _print_rows(repo_data: RepoData) -> None:
    view = SummaryView(repo_data, _NoDisplay())
    view.initialise()
    for line in view.plain_lines():
        click.echo(f"{INDENTATION}{line}".rstrip())


@click.group(context_settings={"help_option_names": ["-h", "--help"]}, invoke_without_command=True)
@click.option(
    "--path",
    "path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    help="Directory inside the repository.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write logs to this file.",
)
@click.option("--debug", is_flag=True, help="Log debug messages.")
@click.pass_context
def main(ctx: click.Context, path: Path, log_file: Path | None, debug: bool) -> None:
    """gsv: summary of the current branch and modified files."""
    interactive = ctx.invoked_subcommand is None and _is_interactive()
    stream = configure_logging(debug=debug, log_file=log_file, console=not interactive)
    if stream is not None:
        ctx.call_on_close(stream.close)
    ctx.obj = path
    if ctx.invoked_subcommand is not None:
        return

    repo_data, config = _open_repo(path)
    if not interactive:
        _print_rows(repo_data)
        return

    run_tui(repo_data, config)


@main.command("show")
@click.pass_obj
def show(path: Path) -> None:
    """Print the summary as plain text."""
    repo_data, _ = _open_repo(path)
    _print_rows(repo_data)


if __name__ == "__main__":
    main()
