"""Serializes command results and the prompt back onto a client stream."""

import asyncio
from collections.abc import Iterable

BANNER_RULE = "================================"


class ResponseWriter:
    """
    Writes protocol text to a single client connection.

    All text is UTF-8 encoded. Raw file bytes are written unchanged, one
    chunk at a time, waiting for the transport to drain between chunks so
    that a slow client only stalls its own response.
    """

    def __init__(self, writer: asyncio.StreamWriter, line_terminator: str = " \n \r") -> None:
        self._writer = writer
        self.line_terminator = line_terminator

    async def send_text(self, text: str) -> None:
        self._writer.write(text.encode("utf-8", errors="surrogateescape"))
        await self._writer.drain()

    async def send_line(self, text: str) -> None:
        await self.send_text(text + self.line_terminator)

    async def send_prompt(self, directory_name: str) -> None:
        await self.send_text(f"[{directory_name}]->")

    async def send_listing(self, names: Iterable[str]) -> None:
        await self.send_text("".join(name + self.line_terminator for name in names))

    async def send_start_banner(self, filename: str) -> None:
        t = self.line_terminator
        await self.send_text(f"{t} {BANNER_RULE} Reading file {filename} {BANNER_RULE}{t}")

    async def send_end_banner(self) -> None:
        t = self.line_terminator
        await self.send_text(f"{t} {BANNER_RULE} End Reading {BANNER_RULE}{t}")

    async def stream(self, chunks: Iterable[bytes]) -> None:
        """Writes raw byte chunks, draining after each one."""
        for chunk in chunks:
            self._writer.write(chunk)
            await self._writer.drain()
