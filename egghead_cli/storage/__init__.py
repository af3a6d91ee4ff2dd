"""
Storage Layer.

This package handles local state: the INI configuration file and the
existence/size checks guarding every lesson file.
"""

from .config_manager import ConfigManager
from .file_gate import FileSystemGate

__all__ = ["ConfigManager", "FileSystemGate"]
