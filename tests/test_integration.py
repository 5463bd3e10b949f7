"""End-to-end integration tests for duke.

This module runs the CLI in a subprocess as a real user would, ensuring all
components work together correctly.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class TestIntegration:
    """E2E integration tests for the complete duke workflow."""

    @pytest.fixture
    def temp_db(self, tmp_path):
        """Path for the task file; the CLI creates it."""
        return str(tmp_path / "data" / "duke.txt")

    def run_cli(self, args, db_path, stdin=None):
        """Run the CLI with given arguments.

        Args:
            args: List of command arguments
            db_path: Path to the task file
            stdin: Text fed to the interactive session

        Returns:
            subprocess.CompletedProcess instance
        """
        env = {**os.environ, "DUKE_DATA_PATH": db_path}
        env.pop("DUKE_TEMP_PATH", None)
        return subprocess.run(
            [sys.executable, "-m", "duke"] + args,
            input=stdin,
            capture_output=True,
            text=True,
            check=False,
            env=env,
            cwd=str(PROJECT_ROOT),
        )

    def test_complete_workflow(self, temp_db):
        """Add, mark, unmark, find, delete and list across separate runs."""
        result = self.run_cli(["todo", "read", "book"], temp_db)
        assert result.returncode == 0
        assert "Now you have 1 task in the list." in result.stdout

        result = self.run_cli(["deadline", "return", "book", "/by", "2019-10-15"], temp_db)
        assert "[D][ ] return book (by: Oct 15 2019)" in result.stdout

        result = self.run_cli(["event", "team", "lunch", "/at", "2019-12-02"], temp_db)
        assert "Now you have 3 tasks in the list." in result.stdout

        result = self.run_cli(["mark", "2"], temp_db)
        assert "[D][X] return book" in result.stdout
        assert Path(temp_db).read_text(encoding="utf-8").splitlines()[1] == (
            "D | 1 | return book | 2019-10-15"
        )

        result = self.run_cli(["unmark", "2"], temp_db)
        assert "[D][ ] return book" in result.stdout

        result = self.run_cli(["find", "book"], temp_db)
        assert "1.[T][ ] read book" in result.stdout
        assert "2.[D][ ] return book" in result.stdout
        assert "lunch" not in result.stdout

        result = self.run_cli(["delete", "1"], temp_db)
        assert "Now you have 2 tasks in the list." in result.stdout

        result = self.run_cli(["list"], temp_db)
        assert result.stdout.strip() == (
            "Here are the tasks in your list:\n"
            "1.[D][ ] return book (by: Oct 15 2019)\n"
            "2.[E][ ] team lunch (at: Dec 02 2019)"
        )

    def test_interactive_session(self, temp_db):
        session = "todo read book\nmark 1\nmark 9\nnonsense\nbye\n"

        result = self.run_cli([], temp_db, stdin=session)

        assert result.returncode == 0
        assert "Nice! I've marked this task as done:" in result.stdout
        assert "OOPS!!! Please enter a valid task number." in result.stdout
        assert "OOPS!!! I'm sorry, but I don't know what that means :-(" in result.stdout
        assert Path(temp_db).read_text(encoding="utf-8") == "T | 1 | read book\n"

    def test_invalid_file_starts_empty(self, temp_db):
        Path(temp_db).parent.mkdir(parents=True)
        Path(temp_db).write_text("this is not a task\n", encoding="utf-8")

        result = self.run_cli(["list"], temp_db)

        assert result.returncode == 0
        assert "There are no tasks in your list." in result.stdout
        assert "invalid" in result.stderr

    def test_verbose_logs_to_stderr(self, temp_db):
        result = self.run_cli(["-v", "todo", "read", "book"], temp_db)

        assert result.returncode == 0
        assert "DEBUG" in result.stderr
        assert "DEBUG" not in result.stdout
