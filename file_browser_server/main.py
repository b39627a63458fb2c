"""
The main entry point for the file browser server.

This script handles environment loading, logging configuration, and server execution.
"""

import asyncio
import logging
import signal
import sys

from dotenv import load_dotenv

from file_browser_server.utils.dependencies import get_base_config


def setup_environment() -> bool:
    """
    Loads environment variables and configures application-wide logging.
    """
    load_dotenv()  # Load environment variables from .env file.

    config = get_base_config()
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.info("Environment and logging configured.")
    return True


def parse_port(argv: list[str], default: int) -> int:
    """Reads the optional port argument."""
    if len(argv) < 2:
        return default
    try:
        port = int(argv[1])
    except ValueError:
        raise SystemExit(f"Invalid port number: {argv[1]}")
    if not 0 <= port <= 65535:
        raise SystemExit(f"Port out of range: {port}")
    return port


async def _serve(server, port: int) -> None:
    """Runs the server until it is cancelled by SIGTERM or Ctrl+C."""
    loop = asyncio.get_running_loop()
    task = asyncio.current_task()
    try:
        loop.add_signal_handler(signal.SIGTERM, task.cancel)
    except NotImplementedError:
        # Signal handlers are not available on Windows event loops.
        pass
    await server.run(port)


def run_server(argv: list[str] | None = None) -> None:
    """
    Sets up the environment and runs the file browser server.
    """
    if not setup_environment():
        logging.critical("Initial environment setup failed. Exiting.")
        sys.exit(1)

    # Import server components after setup to ensure environment is loaded first.
    from .server import FileBrowserServer

    logger = logging.getLogger(__name__)
    config = get_base_config()
    port = parse_port(sys.argv if argv is None else argv, config.PORT)

    logger.info("--- File Browser Server ---")
    server = FileBrowserServer(config)
    try:
        asyncio.run(_serve(server, port))
    except NotADirectoryError as e:
        logger.critical("Root directory is not usable: %s", e)
        sys.exit(1)
    except OSError as e:
        logger.critical("Could not start server on port %s: %s", port, e)
        sys.exit(1)
    except (KeyboardInterrupt, asyncio.CancelledError):
        logger.info("Interrupted, shutting down.")


if __name__ == "__main__":
    run_server()
