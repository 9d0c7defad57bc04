import logging
import os
from pathlib import Path
from unittest.mock import patch

from utils.env import find_project_root, load_project_dotenv
from utils.logger import get_logger

# --- Test find_project_root --- #


def test_find_project_root_found_in_start(tmp_path: Path):
    """Test finding pyproject.toml in the starting directory."""
    start_dir = tmp_path / "subdir"
    start_dir.mkdir()
    (start_dir / "pyproject.toml").touch()

    assert find_project_root(start=start_dir) == start_dir


def test_find_project_root_found_levels_up(tmp_path: Path):
    """Test finding pyproject.toml several levels above the start."""
    project_root = tmp_path / "bookstore"
    project_root.mkdir()
    (project_root / "pyproject.toml").touch()
    start_dir = project_root / "connectors" / "nested"
    start_dir.mkdir(parents=True)

    assert find_project_root(start=start_dir) == project_root


# --- Test load_project_dotenv --- #


@patch("utils.env.load_dotenv")
def test_load_dotenv_called_when_env_file_exists(mock_load_dotenv, tmp_path: Path):
    (tmp_path / "pyproject.toml").touch()
    env_file = tmp_path / ".env"
    env_file.touch()

    load_project_dotenv(start=tmp_path)

    mock_load_dotenv.assert_called_once_with(dotenv_path=env_file, override=False)


@patch("utils.env.load_dotenv")
def test_load_dotenv_skipped_without_env_file(mock_load_dotenv, tmp_path: Path):
    (tmp_path / "pyproject.toml").touch()

    assert load_project_dotenv(start=tmp_path) is False
    mock_load_dotenv.assert_not_called()


def test_load_dotenv_does_not_override_existing(tmp_path: Path, monkeypatch):
    """Existing environment variables win over values in .env."""
    (tmp_path / "pyproject.toml").touch()
    (tmp_path / ".env").write_text(
        "BOOKSTORE_SEED=7\nBOOKSTORE_TEST_ONLY_VAR=from_dotenv"
    )
    monkeypatch.setenv("BOOKSTORE_SEED", "99")
    monkeypatch.delenv("BOOKSTORE_TEST_ONLY_VAR", raising=False)

    load_project_dotenv(start=tmp_path)

    assert os.environ.get("BOOKSTORE_SEED") == "99"
    assert os.environ.get("BOOKSTORE_TEST_ONLY_VAR") == "from_dotenv"
    monkeypatch.delenv("BOOKSTORE_TEST_ONLY_VAR", raising=False)


# --- Test get_logger --- #


def test_get_logger_adds_single_handler():
    logger = get_logger("tests.bookstore.logger")
    again = get_logger("tests.bookstore.logger", level=logging.DEBUG)
    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
