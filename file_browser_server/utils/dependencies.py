"""
Configuration and component wiring for the file browser server.
"""

import logging
from functools import lru_cache

from file_browser_server.commands.interpreter import CommandInterpreter
from file_browser_server.utils.config import ServiceConfig
from file_browser_server.utils.session_manager import SessionManager

logger = logging.getLogger(__name__)


@lru_cache
def get_base_config() -> ServiceConfig:
    """
    Retrieves the base server configuration from environment variables.

    Cached so the environment is parsed once per process.

    Returns:
        A cached instance of the ServiceConfig.
    """
    return ServiceConfig()


def get_session_manager(config: ServiceConfig) -> SessionManager:
    """Returns a fresh session registry rooted at the configured directory."""
    logger.info("Initializing SessionManager rooted at %s", config.ROOT_DIRECTORY)
    return SessionManager(root=config.ROOT_DIRECTORY)


def get_command_interpreter(config: ServiceConfig) -> CommandInterpreter:
    """Returns a command interpreter wired to the configured help resource."""
    logger.info("Initializing CommandInterpreter.")
    return CommandInterpreter(
        help_directory=config.RESOURCES_DIRECTORY,
        help_file=config.HELP_FILE,
        chunk_size=config.READ_BUFFER_SIZE,
    )
