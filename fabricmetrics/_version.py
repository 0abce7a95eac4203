"""Version information for fabricmetrics."""

__version__ = "0.1.0"
