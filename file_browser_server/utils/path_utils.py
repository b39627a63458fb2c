from pathlib import Path

from file_browser_server.models.session import Session


def is_within_root(session: Session, path: Path) -> bool:
    """Checks that an already resolved path lies in the session's root subtree."""
    return path.is_relative_to(session.root.resolve())


def resolve_child_directory(session: Session, name: str) -> Path | None:
    """
    Resolves a user-supplied directory name against the session's current directory.

    Args:
        session: The session whose cursor is the base of the lookup.
        name: The path text the client typed after ``cd``.

    Returns:
        The resolved directory, or None if it does not exist, is not a
        directory, or lies outside the session root.
    """
    candidate = Path(session.current, name)
    try:
        resolved = candidate.resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        # ValueError covers names with an embedded NUL.
        return None

    if not resolved.is_dir() or not is_within_root(session, resolved):
        return None
    return resolved


def resolve_parent_directory(session: Session) -> Path | None:
    """
    Returns the parent of the current directory, or None when the cursor is
    already at the session root.
    """
    if session.at_root:
        return None

    parent = session.current.resolve().parent
    if not is_within_root(session, parent):
        return None
    return parent


def resolve_file(base: Path, filename: str, root: Path | None = None) -> Path:
    """
    Joins a filename onto a base directory.

    When ``root`` is given, the result must stay inside it.

    Raises:
        PermissionError: If the path escapes ``root``.
    """
    target = Path(base, filename).resolve()
    if root is not None and not target.is_relative_to(root.resolve()):
        raise PermissionError(f"'{filename}' is outside the browsable tree")
    return target
