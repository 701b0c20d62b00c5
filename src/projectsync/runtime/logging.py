"""Runtime logging bootstrap helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.config import Config, ConfigManager
from ..util.log import Log, LogFormat, LogLevel


@dataclass(frozen=True)
class LogSettings:
    level: LogLevel
    format: LogFormat
    console: bool
    file: bool
    dev_file: bool


def resolve_log_settings(
    cfg: Config,
    *,
    level: Optional[str] = None,
    format: Optional[str] = None,
    console: Optional[bool] = None,
    file: Optional[bool] = None,
    dev_file: Optional[bool] = None,
) -> LogSettings:
    """Merge explicit overrides over the ``logging`` config section."""
    section = cfg.logging

    lv_text = level or (section.level if section else None) or cfg.log_level
    fm_text = format or (section.format if section else None)

    use_console = console
    if use_console is None:
        use_console = section.console if section and section.console is not None else False

    use_file = file
    if use_file is None:
        use_file = section.file if section and section.file is not None else False

    use_dev = dev_file
    if use_dev is None:
        use_dev = section.dev_file if section and section.dev_file is not None else False

    return LogSettings(
        level=LogLevel.parse(lv_text),
        format=LogFormat.parse(fm_text),
        console=use_console,
        file=use_file,
        dev_file=use_dev,
    )


def bootstrap_logging(
    *,
    level: Optional[str] = None,
    format: Optional[str] = None,
    console: Optional[bool] = None,
    file: Optional[bool] = None,
    dev_file: Optional[bool] = None,
) -> LogSettings:
    """Resolve config and initialize the process logger."""
    settings = resolve_log_settings(
        ConfigManager.get(),
        level=level,
        format=format,
        console=console,
        file=file,
        dev_file=dev_file,
    )
    Log.configure(
        level=settings.level,
        format=settings.format,
        console=settings.console,
        file=settings.file,
        dev=settings.dev_file,
    )
    return settings
