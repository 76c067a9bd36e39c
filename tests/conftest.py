"""Shared pytest fixtures for test isolation helpers."""

from pathlib import Path

import pytest

import termnotify.config as config_module
from termnotify.notifiers.desktop import clear_click_handler


@pytest.fixture()
def termnotify_config_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> tuple[Path, Path]:
    """Redirect termnotify config paths to a temp directory."""
    config_dir = tmp_path / ".termnotify"
    config_file = config_dir / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
    return config_dir, config_file


@pytest.fixture()
def config_dir(termnotify_config_paths: tuple[Path, Path]) -> Path:
    return termnotify_config_paths[0]


@pytest.fixture()
def config_file(termnotify_config_paths: tuple[Path, Path]) -> Path:
    return termnotify_config_paths[1]


@pytest.fixture(autouse=True)
def reset_click_handler():
    """The click handler is process-wide; give every test a clean slate."""
    clear_click_handler()
    yield
    clear_click_handler()
