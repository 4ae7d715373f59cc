"""proxylaunch — run any installed game through a placeholder Steam app."""

__version__ = "0.1.0"
