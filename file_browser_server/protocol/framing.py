"""Turns raw socket reads into command messages."""

from typing import Literal

FramingMode = Literal["drain", "line"]


class MessageBuffer:
    """
    Per-connection accumulation buffer for incoming bytes.

    In ``drain`` mode every read is one message, which matches existing
    clients that send one command per write. In ``line`` mode bytes are
    held until a newline arrives and each complete line is one message.
    """

    def __init__(self, mode: FramingMode = "drain", encoding: str = "utf-8") -> None:
        if mode not in ("drain", "line"):
            raise ValueError(f"Unknown framing mode: {mode}")
        self.mode = mode
        self.encoding = encoding
        self._pending = bytearray()

    @property
    def pending(self) -> bytes:
        return bytes(self._pending)

    def feed(self, data: bytes) -> list[str]:
        """Adds freshly read bytes and returns every message now complete."""
        if self.mode == "drain":
            return [data.decode(self.encoding, errors="replace")]

        self._pending.extend(data)
        messages = []
        while (index := self._pending.find(b"\n")) != -1:
            line = bytes(self._pending[:index])
            del self._pending[: index + 1]
            messages.append(line.decode(self.encoding, errors="replace"))
        return messages

    def clear(self) -> None:
        self._pending.clear()
