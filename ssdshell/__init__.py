"""Test shell and scenario runner for a command-line SSD simulator."""

__version__ = "0.1.0"
__all__ = ["logger", "util", "shell", "scripts", "runner"]