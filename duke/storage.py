"""Storage layer for duke.

This module provides an abstract storage interface and a plain-text
implementation that keeps one task per line:

    <Kind> | <status-bit> | <description>[ | <date>]

Every status change or deletion rewrites the whole file through a temporary
file that is renamed over the original. New tasks are appended.
"""

import datetime
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, List, Optional

from duke.config import default_temp_path, get_settings
from duke.exceptions import DukeError
from duke.models import Task, TaskKind

logger = logging.getLogger(__name__)

SEPARATOR = "|"
DONE_BIT = "1"
NOT_DONE_BIT = "0"
INVALID_SUFFIX = ".invalid"


def encode_task(task: Task) -> str:
    """Serialize a task into one line (without the trailing newline)."""
    fields = [task.kind.value, DONE_BIT if task.done else NOT_DONE_BIT, task.description]
    if task.date is not None:
        fields.append(task.date.isoformat())
    return f" {SEPARATOR} ".join(fields)


def decode_task(line: str) -> Task:
    """Parse one stored line into a Task.

    The separator may be written with or without surrounding spaces.

    Args:
        line: A single line from the task file

    Returns:
        The decoded Task

    Raises:
        DukeError: If the line is malformed
    """
    fields = [field.strip() for field in line.strip().split(SEPARATOR)]
    if len(fields) not in (3, 4):
        raise DukeError(f"Malformed task line: {line!r}")

    kind = TaskKind.from_tag(fields[0])

    status = fields[1]
    if status not in (DONE_BIT, NOT_DONE_BIT):
        raise DukeError(f"Malformed status bit in line: {line!r}")

    description = fields[2]
    if not description:
        raise DukeError(f"Missing description in line: {line!r}")

    if len(fields) == 4 and kind is TaskKind.TODO:
        raise DukeError(f"Todo line carries a date: {line!r}")

    date = None
    if len(fields) == 4:
        try:
            date = datetime.date.fromisoformat(fields[3])
        except ValueError:
            raise DukeError(f"Malformed date in line: {line!r}") from None

    return Task(description=description, kind=kind, done=status == DONE_BIT, date=date)


class Storage(ABC):
    """Abstract base class for task storage implementations.

    Task numbers are 1-based and follow the order tasks were stored in.
    """

    @abstractmethod
    def load(self) -> List[Task]:
        """Load every stored task, in order."""
        pass

    @abstractmethod
    def append(self, task: Task) -> None:
        """Store a newly created task after the existing ones."""
        pass

    @abstractmethod
    def set_status(self, number: int, done: bool) -> None:
        """Change the status of the task stored at position ``number``."""
        pass

    @abstractmethod
    def remove(self, number: int) -> None:
        """Drop the task stored at position ``number``."""
        pass

    @abstractmethod
    def save(self, tasks: List[Task]) -> None:
        """Replace everything stored with ``tasks``."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Set the stored data aside and start over with nothing stored."""
        pass

    @abstractmethod
    def delete(self) -> None:
        """Delete all data from storage."""
        pass


class TextFileStorage(Storage):
    """Line-oriented text file storage.

    Attributes:
        file_path: Path to the task file
        temp_path: Scratch file written during rewrites, then renamed
    """

    def __init__(self, file_path: Optional[str] = None, temp_path: Optional[str] = None):
        """Initialize TextFileStorage with a file path.

        Args:
            file_path: Path to the task file. If None, uses the DUKE_DATA_PATH
                      environment variable or defaults to data/duke.txt
            temp_path: Path to the scratch file. If None, uses DUKE_TEMP_PATH
                      when file_path also came from the environment, otherwise
                      file_path with a .tmp suffix
        """
        if file_path is None:
            settings = get_settings()
            self.file_path = settings.data_path
            default_temp = settings.temp_path
        else:
            self.file_path = Path(file_path)
            default_temp = default_temp_path(self.file_path)
        self.temp_path = Path(temp_path) if temp_path is not None else default_temp

    def load(self) -> List[Task]:
        """Load tasks from the task file, creating it if it is missing.

        Returns:
            List of tasks in file order. Returns an empty list if the file
            is new, empty, or contains any malformed line.
        """
        if not self.file_path.exists():
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            self.file_path.touch()
            logger.debug("Created task file %s", self.file_path)
            return []

        try:
            tasks = [decode_task(line) for line in self._read_lines()]
        except (DukeError, UnicodeDecodeError) as e:
            logger.warning("Task file %s is invalid, starting with an empty list: %s",
                           self.file_path, e)
            self.reset()
            return []

        logger.debug("Loaded %d tasks from %s", len(tasks), self.file_path)
        return tasks

    def append(self, task: Task) -> None:
        """Append one line for a new task.

        Args:
            task: The task that was just added
        """
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        line = encode_task(task) + "\n"
        if self._missing_final_newline():
            line = "\n" + line
        with open(self.file_path, "a", encoding="utf-8") as f:
            f.write(line)

    def set_status(self, number: int, done: bool) -> None:
        """Rewrite the task file with the status bit of one line replaced.

        Args:
            number: 1-based line number of the task
            done: New status

        Raises:
            IndexError: If no task is stored at ``number``
        """
        def flip(line: str) -> Optional[str]:
            task = decode_task(line)
            task.done = done
            return encode_task(task)

        self._rewrite(number, flip)

    def remove(self, number: int) -> None:
        """Rewrite the task file with one line omitted.

        Args:
            number: 1-based line number of the task

        Raises:
            IndexError: If no task is stored at ``number``
        """
        self._rewrite(number, lambda line: None)

    def save(self, tasks: List[Task]) -> None:
        """Rewrite the task file from scratch.

        Args:
            tasks: Tasks to store, in order
        """
        self._replace_with([encode_task(task) for task in tasks])

    def reset(self) -> None:
        """Move the task file aside to <file>.invalid and leave an empty one.

        Line numbers on disk must match the in-memory list, so an unusable
        file cannot stay in place once the list starts empty.
        """
        if self.file_path.exists():
            aside = self.file_path.with_name(self.file_path.name + INVALID_SUFFIX)
            os.replace(self.file_path, aside)
            logger.warning("Moved %s to %s", self.file_path, aside)
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self.file_path.touch()

    def delete(self) -> None:
        """Delete the task file.

        If the file doesn't exist, this method does nothing.
        """
        if self.file_path.exists():
            self.file_path.unlink()

    def _missing_final_newline(self) -> bool:
        if not self.file_path.exists() or self.file_path.stat().st_size == 0:
            return False
        with open(self.file_path, "rb") as f:
            f.seek(-1, os.SEEK_END)
            return f.read(1) != b"\n"

    def _read_lines(self) -> List[str]:
        with open(self.file_path, "r", encoding="utf-8") as f:
            return [line.rstrip("\n") for line in f if line.strip()]

    def _rewrite(self, number: int, change: Callable[[str], Optional[str]]) -> None:
        lines = self._read_lines()
        if not 1 <= number <= len(lines):
            raise IndexError(f"No task stored at line {number}")

        replacement = change(lines[number - 1])
        if replacement is None:
            del lines[number - 1]
        else:
            lines[number - 1] = replacement
        self._replace_with(lines)

    def _replace_with(self, lines: List[str]) -> None:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self.temp_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.temp_path, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
        os.replace(self.temp_path, self.file_path)
        logger.debug("Rewrote %s with %d tasks", self.file_path, len(lines))
