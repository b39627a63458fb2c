import os

import pytest

from file_browser_server.commands.file_commands import CatCommand, HelpCommand, ListCommand
from file_browser_server.commands.interpreter import CommandInterpreter, build_commands, parse_command
from file_browser_server.commands.navigation_commands import (
    ChangeDirectoryCommand,
    ParentDirectoryCommand,
)

T = " \n \r"
START = T + " ================================ Reading file {} ================================" + T
END = T + " ================================ End Reading ================================" + T


class TestParseCommand:
    """Tests for command matching priority and argument extraction"""

    @pytest.fixture
    def commands(self, resources):
        return build_commands(resources)

    @pytest.mark.parametrize(
        "message, command_type, argument",
        [
            ("ls\r\n", ListCommand, ""),
            ("lsx", ListCommand, ""),
            ("cat notes.txt", CatCommand, "notes.txt"),
            ("cat  two  spaces.txt ", CatCommand, " two  spaces.txt"),
            ("help", HelpCommand, ""),
            ("cd sub1", ChangeDirectoryCommand, "sub1"),
            ("cd", ChangeDirectoryCommand, ""),
            ("..", ParentDirectoryCommand, ""),
        ],
    )
    def test_known_commands(self, commands, message, command_type, argument):
        command, parsed = parse_command(commands, message)
        assert isinstance(command, command_type)
        assert parsed == argument

    def test_empty_line(self, commands):
        assert parse_command(commands, "  \r\n") == (None, "")

    def test_unknown_line(self, commands):
        assert parse_command(commands, "pwd\n") == (None, "pwd")

    def test_dot_dot_requires_exact_match(self, commands):
        assert parse_command(commands, "../..") == (None, "../..")


class TestCommandInterpreter:
    """Tests for CommandInterpreter"""

    @pytest.fixture
    def interpreter(self, resources):
        return CommandInterpreter(help_directory=resources, chunk_size=4)

    @pytest.mark.asyncio
    async def test_ls_lists_direct_children(self, interpreter, session, response, fake_writer):
        await interpreter.handle("ls", session, response)
        body, prompt = fake_writer.text().rsplit(T, 1)
        assert set(body.split(T)) == {"readme.txt", "sub1", "sub2"}
        assert prompt == "[TestDirectory]->"

    @pytest.mark.asyncio
    async def test_ls_is_idempotent(self, interpreter, session, response, fake_writer):
        await interpreter.handle("ls", session, response)
        first = set(fake_writer.text().split(T))
        fake_writer.data.clear()
        await interpreter.handle("ls", session, response)
        assert set(fake_writer.text().split(T)) == first

    @pytest.mark.asyncio
    async def test_cd_then_parent_round_trip(self, interpreter, session, response, fake_writer):
        before = session.current
        await interpreter.handle("cd sub1", session, response)
        assert session.current == session.root / "sub1"
        await interpreter.handle("..", session, response)
        assert session.current == before
        assert fake_writer.text() == (
            f"Moved to directory: sub1{T}[sub1]->"
            f"Moved to directory: TestDirectory{T}[TestDirectory]->"
        )

    @pytest.mark.asyncio
    async def test_cd_unknown_directory(self, interpreter, session, response, fake_writer):
        await interpreter.handle("cd missing", session, response)
        assert session.current == session.root
        assert fake_writer.text() == f"Unknown directory: missing{T}[TestDirectory]->"

    @pytest.mark.asyncio
    async def test_cd_cannot_escape_root(self, interpreter, session, response, fake_writer):
        await interpreter.handle("cd ..", session, response)
        assert session.current == session.root
        assert fake_writer.text() == f"Unknown directory: ..{T}[TestDirectory]->"

    @pytest.mark.asyncio
    async def test_parent_at_root(self, interpreter, session, response, fake_writer):
        await interpreter.handle("..", session, response)
        assert session.current == session.root
        assert fake_writer.text() == f"You are in a root directory{T}[TestDirectory]->"

    @pytest.mark.asyncio
    async def test_cursor_never_leaves_root(self, interpreter, session, response):
        for message in ["cd sub1", "cd nested", "..", "..", "..", "..", "cd ../..", "cd /", ".."]:
            await interpreter.handle(message, session, response)
            assert session.current.is_relative_to(session.root)
        assert session.current == session.root

    @pytest.mark.asyncio
    async def test_cat_streams_exact_bytes(self, interpreter, session, response, fake_writer):
        await interpreter.handle("cd sub1", session, response)
        fake_writer.data.clear()
        await interpreter.handle("cat inner.txt", session, response)
        start = START.format("inner.txt").encode()
        end = (END + "[sub1]->").encode()
        data = bytes(fake_writer.data)
        assert data.startswith(start)
        assert data.endswith(end)
        assert data[len(start):-len(end)] == (session.current / "inner.txt").read_bytes()

    @pytest.mark.asyncio
    async def test_cat_missing_file(self, interpreter, session, response, fake_writer):
        await interpreter.handle("cat notes.txt", session, response)
        text = fake_writer.text()
        assert text.startswith(START.format("notes.txt") + "Error reading file notes.txt: ")
        assert "End Reading" not in text
        assert text.endswith(f"{T}[TestDirectory]->")

    @pytest.mark.asyncio
    async def test_cat_directory(self, interpreter, session, response, fake_writer):
        await interpreter.handle("cat sub1", session, response)
        assert "Error reading file sub1: " in fake_writer.text()

    @pytest.mark.asyncio
    async def test_cat_outside_root(self, interpreter, session, response, fake_writer, tmp_path):
        (tmp_path / "secret.txt").write_text("secret", encoding="utf-8")
        await interpreter.handle("cat ../secret.txt", session, response)
        assert "secret" not in fake_writer.text().replace("secret.txt", "")
        assert "Error reading file ../secret.txt: " in fake_writer.text()

    @pytest.mark.asyncio
    async def test_help_ignores_current_directory(self, interpreter, session, response, fake_writer):
        session.current = session.root / "sub2"
        await interpreter.handle("help", session, response)
        assert fake_writer.text() == START.format("help.txt") + "help text\n" + END + "[sub2]->"

    @pytest.mark.asyncio
    async def test_empty_message_only_prompts(self, interpreter, session, response, fake_writer):
        await interpreter.handle(" \r\n", session, response)
        assert fake_writer.text() == "[TestDirectory]->"

    @pytest.mark.asyncio
    async def test_unknown_echoes_raw_message(self, interpreter, session, response, fake_writer):
        await interpreter.handle("pwd\r\n", session, response)
        assert fake_writer.text() == f"Unknown message: pwd\r\n{T}[TestDirectory]->"

    @pytest.mark.asyncio
    async def test_cd_with_nul_is_unknown_directory(self, interpreter, session, response, fake_writer):
        await interpreter.handle("cd a\x00b", session, response)
        assert session.current == session.root
        assert fake_writer.text() == f"Unknown directory: a\x00b{T}[TestDirectory]->"

    @pytest.mark.asyncio
    async def test_cat_with_nul_reports_read_error(self, interpreter, session, response, fake_writer):
        await interpreter.handle("cat a\x00b", session, response)
        text = fake_writer.text()
        assert "Error reading file a\x00b: " in text
        assert text.endswith(f"{T}[TestDirectory]->")

    @pytest.mark.asyncio
    async def test_ls_lists_non_utf8_names(self, interpreter, session, response, fake_writer):
        os.mkdir(os.fsencode(session.root) + b"/bad\xff")
        await interpreter.handle("ls", session, response)
        assert b"bad\xff" + T.encode() in bytes(fake_writer.data)
        assert bytes(fake_writer.data).endswith(b"[TestDirectory]->")

    @pytest.mark.asyncio
    async def test_prompt_inside_non_utf8_directory(self, interpreter, session, response, fake_writer):
        os.mkdir(os.fsencode(session.root) + b"/bad\xff")
        session.current = session.root / os.fsdecode(b"bad\xff")
        await interpreter.handle("", session, response)
        assert bytes(fake_writer.data) == b"[bad\xff]->"
