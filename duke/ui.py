"""Reply rendering for duke.

Every user-visible sentence lives here so commands only decide *what*
happened, not how it reads.
"""

from typing import List, Tuple

from duke.models import Task

INDENT = "  "

INVALID_TASK_NUMBER = "OOPS!!! Please enter a valid task number."
DUPLICATE_TASK = "OOPS!!! This task is already in your list."
UNKNOWN_COMMAND = "OOPS!!! I'm sorry, but I don't know what that means :-("
BAD_DATE = "OOPS!!! Please enter dates in yyyy-mm-dd format."
SEPARATOR_IN_DESCRIPTION = "OOPS!!! A task description cannot contain '|'."
EMPTY_KEYWORD = "OOPS!!! Please tell me what to find."


def empty_description(command: str) -> str:
    return f"OOPS!!! The description of a {command} cannot be empty."


def missing_date(command: str, flag: str) -> str:
    return f"OOPS!!! Please give the {command} a date with {flag} yyyy-mm-dd."


class Ui:
    """Builds the strings duke replies with."""

    def greeting(self) -> str:
        return "Hello! I'm Duke\nWhat can I do for you?"

    def farewell(self) -> str:
        return "Bye. Hope to see you again soon!"

    def error(self, message: str) -> str:
        return message

    def added(self, task: Task, count: int) -> str:
        return (
            "Got it. I've added this task:\n"
            f"{INDENT}{task}\n"
            f"{self._count(count)}"
        )

    def removed(self, task: Task, count: int) -> str:
        return (
            "Noted. I've removed this task:\n"
            f"{INDENT}{task}\n"
            f"{self._count(count)}"
        )

    def marked(self, task: Task) -> str:
        return f"Nice! I've marked this task as done:\n{INDENT}{task}"

    def unmarked(self, task: Task) -> str:
        return f"OK, I've marked this task as not done yet:\n{INDENT}{task}"

    def task_list(self, tasks: List[Task]) -> str:
        if not tasks:
            return "There are no tasks in your list."
        lines = ["Here are the tasks in your list:"]
        lines.extend(f"{number}.{task}" for number, task in enumerate(tasks, start=1))
        return "\n".join(lines)

    def matches(self, matches: List[Tuple[int, Task]]) -> str:
        """Render find results, keeping each task's number in the full list."""
        if not matches:
            return "No matching tasks found."
        lines = ["Here are the matching tasks in your list:"]
        lines.extend(f"{number}.{task}" for number, task in matches)
        return "\n".join(lines)

    def _count(self, count: int) -> str:
        noun = "task" if count == 1 else "tasks"
        return f"Now you have {count} {noun} in the list."
