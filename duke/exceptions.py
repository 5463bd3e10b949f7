"""Exceptions raised by duke."""


class DukeError(Exception):
    """Domain error for duke: malformed task lines, unknown kinds, duplicates."""
