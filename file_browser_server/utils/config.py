"""Service configuration definition."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

RESOURCES_PATH = Path(__file__).resolve().parent.parent / "resources"


class ServiceConfig(BaseSettings):
    """
    Defines the configuration for the file browser server, loaded from
    environment variables prefixed with ``FILE_BROWSER_`` or a .env file.
    """

    # Interface to bind the listening socket to.
    HOST: str = "0.0.0.0"
    # TCP port to listen on. The command line port argument takes precedence.
    PORT: int = 9909
    # Sandbox root every new session starts in.
    ROOT_DIRECTORY: Path = RESOURCES_PATH / "TestDirectory"
    # Location of static resources such as the help file.
    RESOURCES_DIRECTORY: Path = RESOURCES_PATH
    HELP_FILE: str = "help.txt"
    # Upper bound on one socket read; everything already received up to this
    # size forms one message in drain mode.
    SOCKET_READ_SIZE: int = 65536
    # Size of a single file chunk streamed to the client.
    READ_BUFFER_SIZE: int = 1024
    # "drain": the bytes of one read are one command (wire compatible).
    # "line": commands are split on newlines, partial lines are buffered.
    MESSAGE_FRAMING: Literal["drain", "line"] = "drain"
    # Emit the legacy " \n \r" terminator instead of "\r\n".
    LEGACY_LINE_TERMINATOR: bool = True
    LOG_LEVEL: str = "INFO"

    # Environment loading is handled explicitly in main.py via load_dotenv.
    model_config = SettingsConfigDict(env_prefix="FILE_BROWSER_", extra="ignore")

    @property
    def line_terminator(self) -> str:
        return " \n \r" if self.LEGACY_LINE_TERMINATOR else "\r\n"
