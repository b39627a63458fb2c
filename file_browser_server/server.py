"""
TCP server definition for the file browser.
"""

import asyncio
import logging

from file_browser_server.commands.interpreter import CommandInterpreter
from file_browser_server.protocol.framing import MessageBuffer
from file_browser_server.protocol.response_writer import ResponseWriter
from file_browser_server.utils.config import ServiceConfig
from file_browser_server.utils.dependencies import get_command_interpreter, get_session_manager
from file_browser_server.utils.session_manager import SessionManager, SessionNotFoundError

# Get a module-level logger
logger = logging.getLogger(__name__)


class FileBrowserServer:
    """
    Serves every client connection from a single asyncio event loop.

    Each accepted connection gets a ``UserN`` label and a session rooted at the
    configured directory. Reads are processed in arrival order per connection;
    a connection error retires only that connection's session.
    """

    def __init__(
        self,
        config: ServiceConfig,
        sessions: SessionManager | None = None,
        interpreter: CommandInterpreter | None = None,
    ) -> None:
        self.config = config
        self.sessions = sessions or get_session_manager(config)
        self.interpreter = interpreter or get_command_interpreter(config)
        self._server: asyncio.Server | None = None
        self._writers: set[asyncio.StreamWriter] = set()
        self._handlers: set[asyncio.Task] = set()

    @property
    def port(self) -> int | None:
        """The bound port, useful when started on port 0."""
        if self._server is None or not self._server.sockets:
            return None
        return self._server.sockets[0].getsockname()[1]

    async def start(self, port: int | None = None) -> None:
        """
        Binds the listening socket.

        Raises:
            OSError: If the port cannot be bound. Not retried.
        """
        if not self.sessions.root.is_dir():
            raise NotADirectoryError(f"Root directory '{self.sessions.root}' does not exist.")
        bind_port = self.config.PORT if port is None else port
        self._server = await asyncio.start_server(self._handle_connection, self.config.HOST, bind_port)
        logger.info("Server started on %s:%s", self.config.HOST, self.port)
        logger.info("Serving directory: %s", self.sessions.root)

    async def serve_forever(self) -> None:
        if self._server is None:
            await self.start()
        async with self._server:
            await self._server.serve_forever()

    async def run(self, port: int | None = None) -> None:
        """Binds on ``port`` and services connections until cancelled."""
        await self.start(port)
        try:
            await self.serve_forever()
        finally:
            await self.stop()

    async def stop(self) -> None:
        """Closes the listener and every live client connection."""
        if self._server is not None:
            self._server.close()
        for writer in list(self._writers):
            writer.close()
        if self._handlers:
            await asyncio.gather(*self._handlers, return_exceptions=True)
        if self._server is not None:
            await self._server.wait_closed()
        logger.info("Server stopped")

    async def _handle_connection(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        session = self.sessions.open_session()
        label = session.label
        self._writers.add(writer)
        handler = asyncio.current_task()
        self._handlers.add(handler)
        response = ResponseWriter(writer, self.config.line_terminator)
        buffer = MessageBuffer(self.config.MESSAGE_FRAMING)

        try:
            await response.send_prompt(session.directory_name)
            while True:
                data = await reader.read(self.config.SOCKET_READ_SIZE)
                if not data:
                    break
                for message in buffer.feed(data):
                    logger.debug("Incoming command from %s: %s", label, message)
                    await self.interpreter.handle(message, self.sessions.get_session(label), response)
        except SessionNotFoundError:
            logger.error("Read event for %s without a registered session", label)
        except (OSError, asyncio.IncompleteReadError) as e:
            logger.debug("Connection %s failed: %s", label, e)
        finally:
            self.sessions.close_session(label)
            self._writers.discard(writer)
            self._handlers.discard(handler)
            buffer.clear()
            writer.close()
            try:
                await writer.wait_closed()
            except OSError as e:
                logger.debug("Error while closing %s: %s", label, e)
