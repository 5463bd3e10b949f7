"""Core models for duke.

This module defines the core data structures for task tracking:
- Task: A dataclass representing a task with its properties
- TaskKind: Enum for the three kinds of task (todo, deadline, event)
"""

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from duke.exceptions import DukeError

DATE_DISPLAY_FORMAT = "%b %d %Y"


class TaskKind(Enum):
    """Kinds of task, keyed by their one-letter tag."""

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"

    @classmethod
    def from_tag(cls, tag: str) -> "TaskKind":
        """Resolve a one-letter tag into a TaskKind.

        Raises:
            DukeError: If the tag names no kind
        """
        try:
            return cls(tag)
        except ValueError:
            raise DukeError(f"Unknown task kind: {tag!r}") from None


_DATE_LABELS = {
    TaskKind.DEADLINE: "by",
    TaskKind.EVENT: "at",
}


@dataclass
class Task:
    """Task model representing a single task item.

    Attributes:
        description: What the task is about; unique within a TaskList
        kind: TODO, DEADLINE or EVENT
        done: Whether the task has been completed
        date: Due date for deadlines, day of the event for events
    """

    description: str
    kind: TaskKind = TaskKind.TODO
    done: bool = False
    date: Optional[datetime.date] = None

    def mark(self) -> None:
        self.done = True

    def unmark(self) -> None:
        self.done = False

    @property
    def status_icon(self) -> str:
        return "X" if self.done else " "

    def __str__(self) -> str:
        text = f"[{self.kind.value}][{self.status_icon}] {self.description}"
        if self.date is not None and self.kind in _DATE_LABELS:
            label = _DATE_LABELS[self.kind]
            text += f" ({label}: {self.date.strftime(DATE_DISPLAY_FORMAT)})"
        return text
