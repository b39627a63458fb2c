"""Parses command lines and dispatches them to commands."""

import logging
from pathlib import Path

from file_browser_server.models.session import Session
from file_browser_server.protocol.response_writer import ResponseWriter

from .base import Command, CommandError
from .file_commands import CatCommand, HelpCommand, ListCommand
from .navigation_commands import ChangeDirectoryCommand, ParentDirectoryCommand

logger = logging.getLogger(__name__)


def build_commands(help_directory: Path, help_file: str = "help.txt", chunk_size: int = 1024) -> list[Command]:
    """The command table, in matching priority order."""
    return [
        ListCommand(),
        CatCommand(chunk_size=chunk_size),
        HelpCommand(help_directory, help_file=help_file, chunk_size=chunk_size),
        ChangeDirectoryCommand(),
        ParentDirectoryCommand(),
    ]


def parse_command(commands: list[Command], message: str) -> tuple[Command | None, str]:
    """
    Maps a raw message to the first matching command and its argument.

    Returns:
        ``(command, argument)``. The command is None for an empty line and for
        an unknown one; the two are told apart by the trimmed line.
    """
    line = message.strip()
    for command in commands:
        if command.matches(line):
            return command, command.parse_argument(line)
    return None, line


class CommandInterpreter:
    """Turns one incoming message into exactly one action plus a prompt."""

    def __init__(self, help_directory: Path, help_file: str = "help.txt", chunk_size: int = 1024) -> None:
        self.commands = build_commands(help_directory, help_file=help_file, chunk_size=chunk_size)

    async def handle(self, message: str, session: Session, response: ResponseWriter) -> None:
        """
        Executes a message for a session and writes the result and the prompt.

        Command failures are reported to the client. Connection errors are
        left to the caller.
        """
        command, argument = parse_command(self.commands, message)
        if command is not None:
            logger.debug("%s -> %s %r", session.label, command.get_name(), argument)
            try:
                await command.execute(session, argument, response)
            except CommandError as e:
                await response.send_line(e.message)
        elif argument:
            await response.send_line(f"Unknown message: {message}")

        await response.send_prompt(session.directory_name)
