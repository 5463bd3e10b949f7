"""Command-line interface for duke.

Run without a command for an interactive session that reads one command per
line until "bye" or end of input:

    $ duke
    todo read book
    deadline return book /by 2019-10-15
    list
    bye

Or pass a single command to run it once:

    $ duke mark 2
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from duke.config import get_settings
from duke.exceptions import DukeError
from duke.logging_setup import setup_logging
from duke.parser import parse
from duke.storage import Storage, TextFileStorage
from duke.task_list import TaskList
from duke.ui import Ui

logger = logging.getLogger(__name__)


class Duke:
    """One session: the task list loaded from storage plus the reply loop state.

    Attributes:
        storage: Storage backend mirroring every change
        ui: Renders replies
        tasks: The in-memory task list
        is_exit: True once the user has said bye
    """

    def __init__(self, storage: Optional[Storage] = None, ui: Optional[Ui] = None):
        """Initialize Duke and load previously stored tasks.

        Args:
            storage: Storage implementation to use. If None, uses
                    TextFileStorage with the configured file path.
            ui: Reply renderer. If None, uses Ui.

        Raises:
            OSError: If the task file cannot be read or created
        """
        self.storage = storage or TextFileStorage()
        self.ui = ui or Ui()
        self.tasks = self._load()
        self.is_exit = False

    def _load(self) -> TaskList:
        try:
            return TaskList(self.storage.load())
        except DukeError as e:
            logger.warning("Stored tasks are inconsistent, starting with an empty list: %s", e)
            self.storage.reset()
            return TaskList()

    def respond(self, line: str) -> str:
        """Execute one line of input and return the reply."""
        command = parse(line)
        logger.debug("Executing %s", type(command).__name__)
        reply = command.execute(self.tasks, self.ui, self.storage)
        self.is_exit = command.is_exit
        return reply


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="duke",
        description="Personal task-tracking assistant"
    )
    parser.add_argument(
        "-f", "--file",
        help="Task file (default: $DUKE_DATA_PATH or data/duke.txt)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to stderr"
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Run a single command, e.g. 'todo read book', then exit"
    )
    return parser


def run_interactive(duke: Duke, stdin: TextIO, stdout: TextIO) -> int:
    """Read commands line by line until bye or end of input.

    Args:
        duke: The session to feed
        stdin: Source of commands
        stdout: Where replies are printed

    Returns:
        Exit code (0)
    """
    print(duke.ui.greeting(), file=stdout)
    for line in stdin:
        if not line.strip():
            continue
        print(duke.respond(line), file=stdout)
        if duke.is_exit:
            break
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:]

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(logging.DEBUG if args.verbose else settings.log_level)

    storage = TextFileStorage(args.file) if args.file else TextFileStorage()

    try:
        duke = Duke(storage)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command:
        print(duke.respond(" ".join(args.command)))
        return 0

    return run_interactive(duke, sys.stdin, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())
