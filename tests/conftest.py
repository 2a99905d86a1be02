"""Pytest configuration and fixtures."""

import shutil
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from protoredact.config import Settings

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    try:
        yield Path(tmpdir)
    finally:
        shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def override_settings(temp_dir: Path) -> Generator[Settings, None, None]:
    """Provide isolated protoredact settings scoped to tests."""

    import protoredact.config as config_module

    original_settings = getattr(config_module, "_settings", None)

    settings = config_module.Settings(output_dir=temp_dir / "out")

    config_module._settings = settings

    try:
        yield settings
    finally:
        config_module._settings = original_settings


@pytest.fixture
def user_schema_path() -> Path:
    """Path to the bundled user service schema description."""
    return FIXTURES_DIR / "user.yaml"


@pytest.fixture
def write_schema(temp_dir: Path) -> Callable[[str, str], Path]:
    """Write a schema description below ``temp_dir`` and return its path."""

    def _write(name: str, content: str) -> Path:
        path = temp_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
