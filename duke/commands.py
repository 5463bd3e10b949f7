"""Commands for duke.

Each command applies one change to the in-memory TaskList, then calls the
matching Storage method so the task file mirrors the list. Failures are
returned as user-facing strings rather than raised.
"""

import logging
from abc import ABC, abstractmethod

from duke import ui as messages
from duke.exceptions import DukeError
from duke.models import Task
from duke.storage import Storage
from duke.task_list import TaskList
from duke.ui import Ui

logger = logging.getLogger(__name__)


class Command(ABC):
    """A single user command."""

    is_exit = False

    @abstractmethod
    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> str:
        """Run the command.

        Args:
            tasks: The in-memory task list
            ui: Renders the reply
            storage: Receives the same change as ``tasks``

        Returns:
            The reply to show the user
        """
        pass


class AddCommand(Command):
    """Handle todo, deadline and event."""

    def __init__(self, task: Task):
        self.task = task

    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> str:
        try:
            tasks.add(self.task)
        except DukeError:
            return ui.error(messages.DUPLICATE_TASK)

        try:
            storage.append(self.task)
        except OSError as e:
            logger.error("Could not store new task: %s", e)
            return ui.error(str(e))

        return ui.added(self.task, len(tasks))


class _NumberedCommand(Command):
    """Base for commands addressing one task by its list number."""

    def __init__(self, argument: str):
        self.argument = argument

    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> str:
        try:
            number = int(self.argument)
            return self.apply(number, tasks, ui, storage)
        except (IndexError, ValueError):
            return ui.error(messages.INVALID_TASK_NUMBER)
        except OSError as e:
            logger.error("Could not update task file: %s", e)
            return ui.error(str(e))
        except DukeError as e:
            logger.error("Task file no longer matches the list: %s", e)
            return ui.error(str(e))

    @abstractmethod
    def apply(self, number: int, tasks: TaskList, ui: Ui, storage: Storage) -> str:
        pass


class MarkCommand(_NumberedCommand):
    def apply(self, number: int, tasks: TaskList, ui: Ui, storage: Storage) -> str:
        task = tasks.set_status(number, True)
        storage.set_status(number, True)
        return ui.marked(task)


class UnmarkCommand(_NumberedCommand):
    def apply(self, number: int, tasks: TaskList, ui: Ui, storage: Storage) -> str:
        task = tasks.set_status(number, False)
        storage.set_status(number, False)
        return ui.unmarked(task)


class DeleteCommand(_NumberedCommand):
    def apply(self, number: int, tasks: TaskList, ui: Ui, storage: Storage) -> str:
        task = tasks.delete(number)
        storage.remove(number)
        return ui.removed(task, len(tasks))


class ListCommand(Command):
    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> str:
        return ui.task_list(list(tasks))


class FindCommand(Command):
    def __init__(self, keyword: str):
        self.keyword = keyword

    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> str:
        return ui.matches(tasks.find(self.keyword))


class ByeCommand(Command):
    is_exit = True

    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> str:
        return ui.farewell()


class InvalidCommand(Command):
    """Stands in for input that could not be parsed."""

    def __init__(self, message: str):
        self.message = message

    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> str:
        return ui.error(self.message)
