import logging
from pathlib import Path

from file_browser_server.models.session import Session

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    """Raised when a connection label has no registered session."""


class SessionManager:
    """Manages the navigation sessions of all live connections."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root).resolve()
        # Labels are only unique within one server process.
        self._counter = 0
        self._storage: dict[str, Session] = {}

    def open_session(self, root: Path | None = None) -> Session:
        """Creates a session for a newly accepted connection and registers it."""
        self._counter += 1
        label = f"User{self._counter}"
        session_root = Path(root).resolve() if root is not None else self.root
        if not session_root.is_dir():
            raise NotADirectoryError(f"Session root '{session_root}' is not a directory.")
        session = Session(label=label, root=session_root)
        self._storage[label] = session
        logger.info("Client %s was accepted", label)
        return session

    def get_session(self, label: str) -> Session:
        try:
            return self._storage[label]
        except KeyError:
            raise SessionNotFoundError(label) from None

    def close_session(self, label: str) -> Session | None:
        """Removes a session from the registry. Unknown labels are ignored."""
        session = self._storage.pop(label, None)
        if session is not None:
            logger.info("Client %s disconnected!", label)
        return session

    def __contains__(self, label: object) -> bool:
        return label in self._storage

    def __len__(self) -> int:
        return len(self._storage)
