"""
Delegation Logging Module
^^^^^^^^^^^^^^^^^^^^^^^^^
Configures the loggers of the delegation packages from `logger.cfg`.

The delegation packages only create their module loggers; handlers and levels are
installed by `setup_logger`, which the `delegation` command calls on startup.
"""
import configparser
import logging
import logging.config

from config import AppConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name, level=None):
    """
    Configure logging from `logger.cfg` and return the logger with the provided name.

    When the configuration file is not installed, messages of the root logger are written to
    stderr with the same format. When `level` is given, it overrides the root logger level.
    """
    config_path = AppConfig().LOGGER_CONFIG_PATH
    config = configparser.ConfigParser()
    if config.read(config_path):
        logging.config.fileConfig(config, disable_existing_loggers=False)
    else:
        logging.basicConfig(format=LOG_FORMAT, level=logging.WARNING)

    if level is not None:
        logging.getLogger().setLevel(level)

    return logging.getLogger(name)
