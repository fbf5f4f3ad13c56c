"""CLI output formatting: human-readable text (default) and JSON modes."""
from __future__ import annotations

import json
import sys

import click


def output(data: dict[str, object], as_json: bool = False) -> None:
    """Print a command result as text or JSON. Error results exit with status 1."""
    if "error" in data:
        if as_json:
            click.echo(json.dumps(data, indent=2, default=str), err=True)
        else:
            click.echo(f"ERROR: {data['error']}", err=True)
        sys.exit(1)
    if as_json:
        click.echo(json.dumps(data, indent=2, default=str))
        return
    for line in _format_human(data):
        click.echo(line)


def _format_human(data: dict[str, object]) -> list[str]:
    lines: list[str] = []

    # list
    tasks = data.get("tasks")
    if isinstance(tasks, list):
        if not tasks:
            return ["No Tasks"]
        for t in tasks:
            if t.get("body"):
                lines.append(f"{t['id']}. HEAD: {t['head']}")
            else:
                lines.append(f"{t['id']}. {t['head']}")
        return lines

    # done
    results = data.get("results")
    if isinstance(results, list):
        for r in results:
            if r.get("status") == "done":
                lines.append(f"Marked task {r['id']} as done!")
            else:
                lines.append(f"Task {r['id']} not found!")
        return lines

    status = data.get("status")
    task_id = data.get("id")
    if status == "added":
        lines.append(f"Task {task_id} added!")
    elif status == "aborted":
        lines.append("New Task aborted!")
    elif status == "deleted":
        lines.append(f"Marked task {task_id} as done!")
    elif status == "updated":
        lines.append(f"Task {task_id} updated!")
    elif status == "unchanged":
        lines.append(f"Task {task_id} unchanged.")
    else:
        lines.append(json.dumps(data, indent=2, default=str))
    return lines
