"""HTTP API for mediaconf."""

from mediaconf.api.app import app

__all__ = ["app"]
