"""
A module for managing application configurations.

Classes:
- AppConfig: Holds configurations for the application framework.
"""

from pathlib import Path

from pydantic import BaseModel


class AppConfig(BaseModel):
    """A class for accessing application-wide configurations."""

    ROOT_DIR: Path = Path(__file__).resolve().parent.parent
    """The root directory of the project."""

    DEFAULT_ENV_PATH: Path = ROOT_DIR / "env.yaml"
    """The default location of the environment file holding the caveat enforcer addresses."""

    LOGGER_CONFIG_PATH: Path = ROOT_DIR / "logger.cfg"
    """The logging configuration file read by `logger.setup_logger`."""
