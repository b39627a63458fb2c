import logging

from typing_extensions import override

from file_browser_server.models.session import Session
from file_browser_server.protocol.response_writer import ResponseWriter
from file_browser_server.utils.path_utils import (
    resolve_child_directory,
    resolve_parent_directory,
)

from .base import Command, UnknownDirectoryError

logger = logging.getLogger(__name__)


class ChangeDirectoryCommand(Command):
    """Moves the session cursor into a directory below the current one."""

    @override
    def get_name(self) -> str:
        return "cd"

    @override
    def matches(self, line: str) -> bool:
        return line.startswith("cd")

    @override
    def parse_argument(self, line: str) -> str:
        return line[3:]

    @override
    async def execute(self, session: Session, argument: str, response: ResponseWriter) -> None:
        target = resolve_child_directory(session, argument)
        if target is None:
            logger.debug("Unknown directory: %s", argument)
            raise UnknownDirectoryError(argument)

        session.current = target
        logger.debug("%s moved to directory: %s", session.label, session.current)
        await response.send_line(f"Moved to directory: {session.directory_name}")


class ParentDirectoryCommand(Command):
    """Moves the session cursor one level up, never above the root."""

    @override
    def get_name(self) -> str:
        return ".."

    @override
    def matches(self, line: str) -> bool:
        return line == ".."

    @override
    async def execute(self, session: Session, argument: str, response: ResponseWriter) -> None:
        parent = resolve_parent_directory(session)
        if parent is None:
            logger.debug("%s tried to go above its root directory", session.label)
            await response.send_line("You are in a root directory")
            return

        session.current = parent
        logger.debug("%s moved to directory: %s", session.label, session.current)
        await response.send_line(f"Moved to directory: {session.directory_name}")
