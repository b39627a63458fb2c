import asyncio
from pathlib import Path

import pytest

from file_browser_server.models.session import Session
from file_browser_server.protocol.response_writer import ResponseWriter


class FakeStreamWriter:
    """Collects everything written to it, standing in for asyncio.StreamWriter."""

    def __init__(self) -> None:
        self.data = bytearray()
        self.closed = False

    def write(self, data: bytes) -> None:
        self.data.extend(data)

    async def drain(self) -> None:
        await asyncio.sleep(0)

    def close(self) -> None:
        self.closed = True

    def text(self) -> str:
        return self.data.decode("utf-8")


@pytest.fixture
def tree(tmp_path) -> Path:
    """
    Creates a browsable tree:

        TestDirectory/
            readme.txt
            sub1/
                inner.txt
                nested/
            sub2/
    """
    root = tmp_path / "TestDirectory"
    (root / "sub1" / "nested").mkdir(parents=True)
    (root / "sub2").mkdir()
    (root / "readme.txt").write_text("root readme\n", encoding="utf-8")
    (root / "sub1" / "inner.txt").write_bytes(b"inner \x00\xffbytes\r\nline two")
    return root


@pytest.fixture
def resources(tmp_path) -> Path:
    resources = tmp_path / "resources"
    resources.mkdir()
    (resources / "help.txt").write_text("help text\n", encoding="utf-8")
    return resources


@pytest.fixture
def session(tree) -> Session:
    return Session(label="User1", root=tree.resolve())


@pytest.fixture
def fake_writer() -> FakeStreamWriter:
    return FakeStreamWriter()


@pytest.fixture
def response(fake_writer) -> ResponseWriter:
    return ResponseWriter(fake_writer, line_terminator=" \n \r")
