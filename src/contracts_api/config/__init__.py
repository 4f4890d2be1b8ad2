"""
Configuration management for the Contracts API.

Contains Pydantic settings and the logging setup shared by the app factory,
the CLI and the Lambda entry point.
"""

from .settings import Settings, configure_logging, get_settings

__all__ = ["Settings", "configure_logging", "get_settings"]
