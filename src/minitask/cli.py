"""Click CLI entrypoint: `todo <subcommand>`.

Every call is a short batch: load the task file, run one command, save if
anything changed. Human-readable output by default, --json for scripts.
"""

from __future__ import annotations

from typing import Any, Callable

import click

from minitask.config import Config, load_config
from minitask.errors import MinitaskError
from minitask.logging_setup import setup_logging
from minitask.output import output
from minitask.storage import Storage, session


def _config(ctx: click.Context) -> Config:
    if "config" not in ctx.obj:
        ctx.obj["config"] = load_config(ctx.obj["file"], ctx.obj["config_path"])
    return ctx.obj["config"]


def _run(ctx: click.Context, op: Callable[[Storage, Config], dict[str, Any]]) -> None:
    """Run op inside a load/save session and print its result. MinitaskError exits 1."""
    try:
        cfg = _config(ctx)
        with session(cfg.storage_path, cfg.initial_capacity) as store:
            result = op(store, cfg)
    except MinitaskError as exc:
        result = {"error": str(exc)}
    output(result, ctx.obj["json"])


@click.group()
@click.version_option(package_name="minitask")
@click.option("--file", "file", default=None, metavar="PATH", help="Task file (default ~/.tasks.bin, env MINITASK_FILE)")
@click.option("--config", "config_path", default=None, metavar="PATH", help="YAML config file (env MINITASK_CONFIG)")
@click.option("--json", "as_json", is_flag=True, help="JSON output instead of text")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr")
@click.pass_context
def cli(ctx: click.Context, file: str | None, config_path: str | None, as_json: bool, verbose: bool) -> None:
    """todo: a minimalistic task manager."""
    ctx.ensure_object(dict)
    ctx.obj["file"] = file
    ctx.obj["config_path"] = config_path
    ctx.obj["json"] = as_json
    setup_logging(verbose)


@cli.command()
@click.argument("head", required=False)
@click.argument("body", required=False)
@click.pass_context
def new(ctx: click.Context, head: str | None, body: str | None) -> None:
    """Create new task. Without arguments, compose it in $EDITOR."""
    from minitask.tasks import add_task, compose_task

    if head is None and body is None:
        _run(ctx, lambda store, cfg: compose_task(store, cfg.editor_or_default()))
    else:
        _run(ctx, lambda store, cfg: add_task(store, head, body))


@cli.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """List all tasks heads."""
    from minitask.tasks import list_tasks
    _run(ctx, lambda store, cfg: list_tasks(store))


@cli.command()
@click.argument("task_id", metavar="ID", type=int)
@click.pass_context
def get(ctx: click.Context, task_id: int) -> None:
    """Get && update a task in $EDITOR. Emptying it deletes the task."""
    from minitask.tasks import get_task
    _run(ctx, lambda store, cfg: get_task(store, task_id, cfg.editor))


@cli.command()
@click.argument("ids", metavar="ID...", nargs=-1, required=True, type=int)
@click.pass_context
def done(ctx: click.Context, ids: tuple[int, ...]) -> None:
    """Delete task(s) by their id."""
    from minitask.tasks import done_tasks
    _run(ctx, lambda store, cfg: done_tasks(store, list(ids)))


if __name__ == "__main__":
    cli()
