from __future__ import annotations

import shlex
import sys
from pathlib import Path

import pytest


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Each test gets its own HOME, task file, and no ambient editor/config."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("MINITASK_FILE", str(tmp_path / "tasks.bin"))
    monkeypatch.setenv("MINITASK_CONFIG", str(tmp_path / "config.yaml"))
    monkeypatch.delenv("MINITASK_CAPACITY", raising=False)
    monkeypatch.delenv("EDITOR", raising=False)
    return tmp_path


@pytest.fixture
def task_file(tmp_path) -> Path:
    return tmp_path / "tasks.bin"


# ---------------------------------------------------------------------------
# Fake editor: a python script that records what it was given and rewrites it
# ---------------------------------------------------------------------------

_EDITOR_SCRIPT = """\
import pathlib, sys
path = pathlib.Path(sys.argv[1])
pathlib.Path({seen!r}).write_text(path.read_text(encoding="utf-8"), encoding="utf-8")
pathlib.Path({args!r}).write_text(sys.argv[1], encoding="utf-8")
content = {content!r}
if isinstance(content, bytes):
    path.write_bytes(content)
elif content is not None:
    path.write_text(content, encoding="utf-8")
sys.exit({exit_code!r})
"""


class FakeEditor:
    def __init__(self, root: Path):
        self.root = root
        self.seen_file = root / "editor-seen.txt"
        self.args_file = root / "editor-args.txt"

    def command(self, content: str | bytes | None, exit_code: int = 0) -> str:
        """Write the script and return an EDITOR command line that runs it."""
        script = self.root / "fake_editor.py"
        script.write_text(
            _EDITOR_SCRIPT.format(
                seen=str(self.seen_file),
                args=str(self.args_file),
                content=content,
                exit_code=exit_code,
            )
        )
        return f"{shlex.quote(sys.executable)} {shlex.quote(str(script))}"

    @property
    def seen(self) -> str:
        """What the scratch file contained when the editor opened it."""
        return self.seen_file.read_text(encoding="utf-8")

    @property
    def scratch_path(self) -> Path:
        return Path(self.args_file.read_text(encoding="utf-8"))


@pytest.fixture
def fake_editor(tmp_path) -> FakeEditor:
    root = tmp_path / "editor"
    root.mkdir()
    return FakeEditor(root)
