"""Exceptions raised by the client."""

from __future__ import annotations


class KumaError(Exception):
    """Base class for errors reported by the client."""


class NotFoundError(KumaError, LookupError):
    """A requested object does not exist."""

    def __init__(self, context: str = "") -> None:
        self.context = context
        super().__init__(f"{context}: not found" if context else "not found")


class CommandError(KumaError):
    """The server rejected a command or did not answer it."""

    def __init__(self, command: str, message: str) -> None:
        self.command = command
        self.message = message
        super().__init__(f"{command}: {message}")