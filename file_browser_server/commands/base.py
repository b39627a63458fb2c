"""Base class and error types for protocol commands."""

from abc import ABC, abstractmethod

from file_browser_server.models.session import Session
from file_browser_server.protocol.response_writer import ResponseWriter


class CommandError(Exception):
    """A recoverable command failure reported to the client as text."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message: str = message


class UnknownDirectoryError(CommandError):
    def __init__(self, argument: str):
        super().__init__(f"Unknown directory: {argument}")
        self.argument = argument


class FileReadError(CommandError):
    def __init__(self, filename: str, cause: Exception):
        reason = getattr(cause, "strerror", None) or str(cause)
        super().__init__(f"Error reading file {filename}: {reason}")
        self.filename = filename


class Command(ABC):
    """A single protocol command, matched against a trimmed input line."""

    @abstractmethod
    def get_name(self) -> str:
        pass

    @abstractmethod
    def matches(self, line: str) -> bool:
        pass

    def parse_argument(self, line: str) -> str:
        """Extracts the command argument. Commands without one return ''."""
        return ""

    @abstractmethod
    async def execute(self, session: Session, argument: str, response: ResponseWriter) -> None:
        """
        Runs the command and writes its result, without the trailing prompt.

        Raises:
            CommandError: For failures the client should be told about.
        """
        pass
