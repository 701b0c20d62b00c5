from collections.abc import Iterator
from pathlib import Path

import pytest

from projectsync.core.config import ConfigManager


@pytest.fixture(autouse=True)
def config_context(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("PROJECTSYNC_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("PROJECTSYNC_CONFIG_CONTENT", raising=False)
    token = ConfigManager.provide(ConfigManager())
    try:
        yield
    finally:
        ConfigManager.restore(token)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
