"""In-memory task list for duke.

This module provides the TaskList class, which keeps tasks in the order they
were added and addresses them by 1-based number, the same numbering the
storage layer uses for lines on disk.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from duke.exceptions import DukeError
from duke.models import Task


class TaskList:
    """Ordered collection of tasks with unique descriptions.

    Attributes:
        tasks: Tasks in insertion order
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        """Initialize TaskList, optionally with previously stored tasks.

        Args:
            tasks: Tasks to start with, in order

        Raises:
            DukeError: If two of the given tasks share a description
        """
        self.tasks: List[Task] = []
        self._by_description: Dict[str, Task] = {}
        for task in tasks or []:
            self.add(task)

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def contains(self, description: str) -> bool:
        return description in self._by_description

    def add(self, task: Task) -> Task:
        """Append a task to the end of the list.

        Args:
            task: The task to add

        Returns:
            The added task

        Raises:
            DukeError: If a task with the same description already exists
        """
        if self.contains(task.description):
            raise DukeError(f"Duplicate task description: {task.description!r}")
        self.tasks.append(task)
        self._by_description[task.description] = task
        return task

    def get(self, number: int) -> Task:
        """Get the task at a 1-based position.

        Raises:
            IndexError: If number is outside 1..len(self)
        """
        if not 1 <= number <= len(self.tasks):
            raise IndexError(f"Task number {number} out of range")
        return self.tasks[number - 1]

    def set_status(self, number: int, done: bool) -> Task:
        """Mark the task at ``number`` as done or not done.

        Returns:
            The updated task

        Raises:
            IndexError: If number is outside 1..len(self)
        """
        task = self.get(number)
        if done:
            task.mark()
        else:
            task.unmark()
        return task

    def delete(self, number: int) -> Task:
        """Remove the task at ``number``; later tasks move up by one.

        Returns:
            The removed task

        Raises:
            IndexError: If number is outside 1..len(self)
        """
        task = self.get(number)
        del self.tasks[number - 1]
        del self._by_description[task.description]
        return task

    def find(self, keyword: str) -> List[Tuple[int, Task]]:
        """Find tasks whose description contains ``keyword``, ignoring case.

        Returns:
            (number, task) pairs in list order
        """
        needle = keyword.lower()
        return [
            (number, task)
            for number, task in enumerate(self.tasks, start=1)
            if needle in task.description.lower()
        ]
