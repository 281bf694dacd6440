"""mediaconf - media server configuration service and home screen settings editor."""

__version__ = "0.1.0"
