# src/config/paths.py — v1
"""Process-wide root directory used to anchor relative log filenames.

Resolution order: an explicit ``set_root_path()`` call, then the
``MELLIVORA_LOGGER_ROOT_PATH`` setting, then the nearest ancestor of the
working directory holding a project-marker directory.
"""

from __future__ import annotations

from pathlib import Path

PROJECT_MARKERS: tuple[str, ...] = (".git", ".venv", "venv")

_root_path: str | None = None


def set_root_path(path: str | Path) -> None:
    """Set the project root directory.

    Non-existent paths are accepted as-is so that callers can point the
    logger at a directory that will be created on first write.
    """
    global _root_path
    p = Path(path).expanduser()
    _root_path = str(p.resolve()) if p.is_dir() else str(p)


def reset_root_path() -> None:
    """Forget the configured root so the next lookup discovers it again."""
    global _root_path
    _root_path = None


def get_root_path() -> str | None:
    """Return the project root directory, discovering it on first use."""
    if _root_path is None:
        from mellivora_logger.config.settings import load_settings

        configured = load_settings().root_path
        if configured is not None:
            set_root_path(configured)
        else:
            found = find_project_root(Path.cwd())
            if found is not None:
                set_root_path(found)
    return _root_path


def find_project_root(start: Path, markers: tuple[str, ...] = PROJECT_MARKERS) -> Path | None:
    """Walk up from ``start`` to the first directory containing a marker dir."""
    start = start.resolve()
    for candidate in (start, *start.parents):
        if any((candidate / marker).is_dir() for marker in markers):
            return candidate
    return None
