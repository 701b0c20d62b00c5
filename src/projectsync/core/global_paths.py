"""Per-user directory paths for projectsync.

Only configuration and log files ever touch disk; cached project data is
held in memory for the lifetime of a session.
"""

import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

APP_NAME = "projectsync"


class GlobalPath:
    """Directory lookup for projectsync files."""

    @classmethod
    def home(cls) -> str:
        """Get user home directory, with override for testing."""
        return os.environ.get("PROJECTSYNC_TEST_HOME", str(Path.home()))

    @classmethod
    def data(cls) -> str:
        """Application data directory."""
        return user_data_dir(APP_NAME)

    @classmethod
    def log(cls) -> str:
        """Log file directory."""
        return str(Path(cls.data()) / "log")

    @classmethod
    def config(cls) -> str:
        """Configuration directory."""
        return os.environ.get("PROJECTSYNC_CONFIG_DIR") or user_config_dir(APP_NAME)
