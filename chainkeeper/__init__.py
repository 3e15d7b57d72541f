"""Settings, notifications, errors, process launching, terminal output and disk IO for a toolchain manager."""

__version__ = "0.1.0"