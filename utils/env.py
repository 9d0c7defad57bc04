from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

"""Environment helper utilities.

Loads a `.env` file from the project root so that ``BOOKSTORE_*`` settings
defined there become available via ``os.getenv``.  Uses `python-dotenv`.
"""

__all__ = ["find_project_root", "load_project_dotenv"]


def find_project_root(start: Path | None = None) -> Path:
    """Traverse upwards until we find a directory that contains `pyproject.toml`."""
    current = start or Path(__file__).resolve().parent
    for _ in range(10):  # safety break
        if (current / "pyproject.toml").exists():
            return current
        if current.parent == current:
            break
        current = current.parent
    return Path(__file__).resolve().parent


def load_project_dotenv(start: Path | None = None) -> bool:
    """Load environment variables from the project-level `.env` if present."""
    dotenv_path = find_project_root(start) / ".env"
    if dotenv_path.exists():
        return load_dotenv(dotenv_path=dotenv_path, override=False)
    return False
