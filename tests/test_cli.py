"""CLI tests: the four commands end to end against a temp task file."""

from __future__ import annotations

import json
import os

import click
import pytest
from click.testing import CliRunner

from minitask.cli import cli
from minitask.storage import load


@pytest.fixture
def runner():
    return CliRunner()


def _run(runner, *args):
    return runner.invoke(cli, list(args))


def _heads(task_file) -> list[str]:
    return [t.head for t in load(task_file).tasks()]


# ---------------------------------------------------------------------------
# Group
# ---------------------------------------------------------------------------


def test_cli_is_group():
    assert isinstance(cli, click.Group)


def test_cli_help_exits_zero(runner):
    result = _run(runner, "--help")
    assert result.exit_code == 0


def test_cli_expected_subcommands():
    assert sorted(cli.commands) == ["done", "get", "list", "new"]


# ---------------------------------------------------------------------------
# new / list / done
# ---------------------------------------------------------------------------


class TestScenario:
    def test_add_list_done(self, runner, task_file):
        result = _run(runner, "new", "buy milk")
        assert result.exit_code == 0, result.output
        assert "Task 1 added!" in result.output

        result = _run(runner, "list")
        assert result.output.splitlines() == ["1. buy milk"]

        result = _run(runner, "new", "call mom", "ring at 5")
        assert "Task 2 added!" in result.output

        result = _run(runner, "done", "1")
        assert result.exit_code == 0
        assert "Marked task 1 as done!" in result.output

        result = _run(runner, "list")
        assert result.output.splitlines() == ["1. HEAD: call mom"]

    def test_list_empty(self, runner, task_file):
        result = _run(runner, "list")
        assert result.exit_code == 0
        assert result.output.strip() == "No Tasks"
        assert not task_file.exists()

    def test_blank_new_is_rejected(self, runner, task_file):
        result = _run(runner, "new", "  ", "")
        assert result.exit_code == 1
        assert "ERROR" in result.output
        assert not task_file.exists()

    def test_done_reports_unknown_ids_without_failing(self, runner, task_file):
        for head in ("a", "b", "c"):
            _run(runner, "new", head)
        result = _run(runner, "done", "7", "2")
        assert result.exit_code == 0
        assert result.output.splitlines() == ["Task 7 not found!", "Marked task 2 as done!"]
        assert _heads(task_file) == ["a", "c"]

    def test_done_requires_an_id(self, runner):
        result = _run(runner, "done")
        assert result.exit_code != 0

    def test_done_only_unknown_does_not_write(self, runner, task_file):
        _run(runner, "new", "a")
        before = task_file.stat().st_mtime_ns
        data = task_file.read_bytes()
        result = _run(runner, "done", "5")
        assert result.exit_code == 0
        assert task_file.read_bytes() == data
        assert task_file.stat().st_mtime_ns == before

    def test_explicit_file_option(self, runner, tmp_path):
        other = tmp_path / "elsewhere.bin"
        result = _run(runner, "--file", str(other), "new", "x")
        assert result.exit_code == 0
        assert _heads(other) == ["x"]

    def test_json_output(self, runner):
        _run(runner, "new", "a", "body")
        result = _run(runner, "--json", "list")
        assert json.loads(result.output) == {"tasks": [{"id": 1, "head": "a", "body": "body"}]}


# ---------------------------------------------------------------------------
# new via editor
# ---------------------------------------------------------------------------


class TestNewInEditor:
    def test_compose(self, runner, task_file, fake_editor, monkeypatch):
        monkeypatch.setenv("EDITOR", fake_editor.command("write docs\nsection 1\nsection 2\n"))
        result = _run(runner, "new")
        assert result.exit_code == 0, result.output
        assert "Task 1 added!" in result.output
        task = load(task_file).get(1)
        assert (task.head, task.body) == ("write docs", "section 1\nsection 2")
        assert fake_editor.seen == ""

    def test_empty_compose_aborts(self, runner, task_file, fake_editor, monkeypatch):
        monkeypatch.setenv("EDITOR", fake_editor.command(""))
        result = _run(runner, "new")
        assert result.exit_code == 0
        assert "New Task aborted!" in result.output
        assert not task_file.exists()

    def test_editor_failure(self, runner, task_file, fake_editor, monkeypatch):
        monkeypatch.setenv("EDITOR", fake_editor.command("x", exit_code=1))
        result = _run(runner, "new")
        assert result.exit_code == 1
        assert "non zero" in result.output
        assert not task_file.exists()


# ---------------------------------------------------------------------------
# get
# ---------------------------------------------------------------------------


class TestGet:
    @pytest.fixture(autouse=True)
    def two_tasks(self, runner):
        _run(runner, "new", "first", "details")
        _run(runner, "new", "second")

    def test_edit_updates(self, runner, task_file, fake_editor, monkeypatch):
        monkeypatch.setenv("EDITOR", fake_editor.command("first!\nmore details"))
        result = _run(runner, "get", "1")
        assert result.exit_code == 0, result.output
        assert "Task 1 updated!" in result.output
        assert fake_editor.seen == "first\ndetails"
        task = load(task_file).get(1)
        assert (task.head, task.body) == ("first!", "more details")

    def test_unchanged_does_not_write(self, runner, task_file, fake_editor, monkeypatch):
        data = task_file.read_bytes()
        monkeypatch.setenv("EDITOR", fake_editor.command(None))
        result = _run(runner, "get", "1")
        assert result.exit_code == 0
        assert "unchanged" in result.output
        assert task_file.read_bytes() == data

    def test_emptied_task_is_deleted(self, runner, task_file, fake_editor, monkeypatch):
        monkeypatch.setenv("EDITOR", fake_editor.command(""))
        result = _run(runner, "get", "1")
        assert result.exit_code == 0
        assert "Marked task 1 as done!" in result.output
        assert _heads(task_file) == ["second"]
        assert _run(runner, "list").output.splitlines() == ["1. second"]

    def test_unknown_id(self, runner, fake_editor, monkeypatch):
        monkeypatch.setenv("EDITOR", fake_editor.command("x"))
        result = _run(runner, "get", "9")
        assert result.exit_code == 1
        assert "Task with id 9 not found" in result.output
        assert not fake_editor.seen_file.exists()

    def test_unset_editor_is_an_error(self, runner, task_file):
        data = task_file.read_bytes()
        result = _run(runner, "get", "1")
        assert result.exit_code == 1
        assert "EDITOR" in result.output
        assert task_file.read_bytes() == data

    def test_editor_from_yaml_config(self, runner, tmp_path, fake_editor):
        (tmp_path / "config.yaml").write_text(f"editor: {json.dumps(fake_editor.command('renamed'))}\n")
        result = _run(runner, "get", "2")
        assert result.exit_code == 0, result.output
        assert _run(runner, "list").output.splitlines() == ["1. HEAD: first", "2. renamed"]


# ---------------------------------------------------------------------------
# Recovery and failures
# ---------------------------------------------------------------------------


class TestRecovery:
    def test_corrupt_file_warns_and_continues(self, runner, task_file):
        garbage = os.urandom(64)
        task_file.write_bytes(garbage)
        result = _run(runner, "list")
        assert result.exit_code == 0
        assert "No Tasks" in result.output
        assert "WARNING" in result.output
        assert task_file.with_name("tasks.bin.bak").read_bytes() == garbage

    def test_unwritable_file_fails(self, runner, task_file):
        task_file.mkdir()
        result = _run(runner, "new", "a")
        assert result.exit_code == 1
        assert "ERROR" in result.output

    def test_bad_config_fails(self, runner, tmp_path):
        (tmp_path / "config.yaml").write_text("- not a mapping\n")
        result = _run(runner, "list")
        assert result.exit_code == 1
        assert "mapping" in result.output
