"""Turns one line of user input into a Command.

    todo <description>
    deadline <description> /by <yyyy-mm-dd>
    event <description> /at <yyyy-mm-dd>
    mark <n> | unmark <n> | delete <n>
    list | find <keyword> | bye

Malformed input never raises; it becomes an InvalidCommand carrying the
message to show.
"""

import datetime
import re
from typing import Callable, Dict, Optional

from duke import ui as messages
from duke.commands import (
    AddCommand,
    ByeCommand,
    Command,
    DeleteCommand,
    FindCommand,
    InvalidCommand,
    ListCommand,
    MarkCommand,
    UnmarkCommand,
)
from duke.models import Task, TaskKind
from duke.storage import SEPARATOR

DATE_FLAGS = {
    TaskKind.DEADLINE: "/by",
    TaskKind.EVENT: "/at",
}


def _check_description(word: str, description: str) -> Optional[Command]:
    if not description:
        return InvalidCommand(messages.empty_description(word))
    if SEPARATOR in description:
        return InvalidCommand(messages.SEPARATOR_IN_DESCRIPTION)
    return None


def parse_todo(argument: str) -> Command:
    problem = _check_description("todo", argument)
    if problem is not None:
        return problem
    return AddCommand(Task(description=argument, kind=TaskKind.TODO))


def _parse_dated(word: str, kind: TaskKind, argument: str) -> Command:
    flag = DATE_FLAGS[kind]
    # The flag only counts as a whole word: "/bytes" is part of a description.
    parts = re.split(rf"(?:^|\s){re.escape(flag)}(?:\s|$)", argument, maxsplit=1)
    description = parts[0].strip()
    when = parts[1] if len(parts) == 2 else ""

    problem = _check_description(word, description)
    if problem is not None:
        return problem
    if not when.strip():
        return InvalidCommand(messages.missing_date(word, flag))

    try:
        date = datetime.date.fromisoformat(when.strip())
    except ValueError:
        return InvalidCommand(messages.BAD_DATE)

    return AddCommand(Task(description=description, kind=kind, date=date))


def parse_deadline(argument: str) -> Command:
    return _parse_dated("deadline", TaskKind.DEADLINE, argument)


def parse_event(argument: str) -> Command:
    return _parse_dated("event", TaskKind.EVENT, argument)


def parse_find(argument: str) -> Command:
    if not argument:
        return InvalidCommand(messages.EMPTY_KEYWORD)
    return FindCommand(argument)


PARSERS: Dict[str, Callable[[str], Command]] = {
    "todo": parse_todo,
    "deadline": parse_deadline,
    "event": parse_event,
    "mark": MarkCommand,
    "unmark": UnmarkCommand,
    "delete": DeleteCommand,
    "list": lambda argument: ListCommand(),
    "find": parse_find,
    "bye": lambda argument: ByeCommand(),
}


def parse(line: str) -> Command:
    """Parse a line of user input.

    Args:
        line: Raw input, e.g. "deadline return book /by 2019-10-15"

    Returns:
        The Command to execute; InvalidCommand for anything unrecognised
    """
    word, _, argument = line.strip().partition(" ")
    handler = PARSERS.get(word.lower())
    if handler is None:
        return InvalidCommand(messages.UNKNOWN_COMMAND)
    return handler(argument.strip())
