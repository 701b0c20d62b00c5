"""Core infrastructure modules."""

from .global_paths import GlobalPath

__all__ = ["GlobalPath"]

# Log and ConfigManager are imported from their own modules to avoid cycles:
# from ..util.log import Log
# from .config import ConfigManager
