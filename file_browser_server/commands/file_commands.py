import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from typing_extensions import override

from file_browser_server.models.session import Session
from file_browser_server.protocol.response_writer import ResponseWriter
from file_browser_server.utils.path_utils import resolve_file

from .base import Command, CommandError, FileReadError

logger = logging.getLogger(__name__)


def list_directory(path: Path) -> list[str]:
    """Direct child names of a directory, in filesystem order."""
    return os.listdir(path)


def _read_chunks(f: BinaryIO, filename: str, chunk_size: int) -> Iterator[bytes]:
    while True:
        try:
            chunk = f.read(chunk_size)
        except OSError as e:
            raise FileReadError(filename, e) from e
        if not chunk:
            return
        yield chunk


async def send_file(
    response: ResponseWriter,
    base: Path,
    filename: str,
    chunk_size: int,
    root: Path | None = None,
) -> None:
    """
    Streams ``base/filename`` to the client between the reading banners.

    The file is opened after the start banner has gone out; a missing or
    unreadable file leaves the banner without a matching end banner.

    Raises:
        FileReadError: If the file cannot be resolved, opened or read.
    """
    await response.send_start_banner(filename)
    try:
        path = resolve_file(base, filename, root=root)
        f = open(path, "rb")
    except (OSError, ValueError) as e:
        logger.debug("Could not open %s in %s: %s", filename, base, e)
        raise FileReadError(filename, e) from e

    with f:
        await response.stream(_read_chunks(f, filename, chunk_size))
    await response.send_end_banner()


class ListCommand(Command):
    """Lists the entries of the current directory."""

    @override
    def get_name(self) -> str:
        return "ls"

    @override
    def matches(self, line: str) -> bool:
        return line.startswith("ls")

    @override
    async def execute(self, session: Session, argument: str, response: ResponseWriter) -> None:
        logger.debug("Current directory is: %s", session.current)
        try:
            names = list_directory(session.current)
        except OSError as e:
            raise CommandError(f"Error listing directory: {e.strerror or e}") from e
        await response.send_listing(names)


class CatCommand(Command):
    """Streams a file from the current directory."""

    def __init__(self, chunk_size: int = 1024) -> None:
        self.chunk_size = chunk_size

    @override
    def get_name(self) -> str:
        return "cat"

    @override
    def matches(self, line: str) -> bool:
        return line.startswith("cat")

    @override
    def parse_argument(self, line: str) -> str:
        return line[4:]

    @override
    async def execute(self, session: Session, argument: str, response: ResponseWriter) -> None:
        await send_file(response, session.current, argument, self.chunk_size, root=session.root)


class HelpCommand(Command):
    """Streams the fixed help resource, independent of the session cursor."""

    def __init__(self, help_directory: Path, help_file: str = "help.txt", chunk_size: int = 1024) -> None:
        self.help_directory = Path(help_directory)
        self.help_file = help_file
        self.chunk_size = chunk_size

    @override
    def get_name(self) -> str:
        return "help"

    @override
    def matches(self, line: str) -> bool:
        return line.startswith("help")

    @override
    async def execute(self, session: Session, argument: str, response: ResponseWriter) -> None:
        logger.debug("%s called help file", session.label)
        await send_file(response, self.help_directory, self.help_file, self.chunk_size)
