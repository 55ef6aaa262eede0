"""
A module for exposing the deployment environment of the delegation framework.

This module is responsible for loading, parsing, and validating the environment
configuration from the `env.yaml` file. It uses Pydantic to ensure that
the configuration adheres to expected formats and types.

Functions:
- create_default_env_file: Creates a default environment file if it doesn't exist.

Classes:
- DelegationEnvironment: The caveat enforcer contracts of a deployment.
- EnvConfig: Loads the environment file and exposes it as Python objects.

Usage:
- Initialize an instance of EnvConfig to load the configuration.
- Pass it (or any DelegationEnvironment) to a `CaveatBuilder`.
"""

from pathlib import Path
from typing import Dict

import yaml
from pydantic import BaseModel, ValidationError

from delegation_base_types import Address
from delegation_exceptions import UnknownCaveatError

from .app import AppConfig

ENV_PATH = AppConfig().DEFAULT_ENV_PATH

DEFAULT_ENV_TEMPLATE = """\
# Addresses of the caveat enforcer contracts of the target deployment, keyed by contract name.
caveat_enforcers: {}
#  AllowedTargetsEnforcer: "0x..."
#  AllowedMethodsEnforcer: "0x..."
#  ValueLteEnforcer: "0x..."
"""


class DelegationEnvironment(BaseModel):
    """
    Represents a deployment of the delegation framework.

    Attributes:
    - caveat_enforcers (Dict[str, Address]): Enforcer contract addresses keyed by contract name,
      e.g. `AllowedTargetsEnforcer`.

    """

    caveat_enforcers: Dict[str, Address] = {}

    def get_enforcer(self, name: str) -> Address:
        """Return the address of the enforcer contract with the given name."""
        if name not in self.caveat_enforcers:
            raise UnknownCaveatError(f"No enforcer named '{name}' in the environment.")
        return self.caveat_enforcers[name]


class EnvConfig(DelegationEnvironment):
    """
    Loads and validates the delegation environment from `env.yaml`.

    This is a wrapper class for the DelegationEnvironment model. It reads a config file
    from disk into a DelegationEnvironment model and then exposes it.

    Content of the wrong shape raises `ValueError("Invalid configuration: ...")`, while a
    malformed enforcer address raises `InvalidAddressError`, as it does everywhere else.
    """

    def __init__(self, path: Path | None = None):
        """Init for the EnvConfig class."""
        env_path = ENV_PATH if path is None else path
        if not env_path.exists():
            raise FileNotFoundError(
                f"The configuration file '{env_path}' does not exist. "
                "Run `delegation make-env` to create it."
            )

        with env_path.open("r") as file:
            config_data = yaml.safe_load(file) or {}
            if not isinstance(config_data, dict):
                raise ValueError(f"Invalid configuration: expected a mapping in '{env_path}'")
            try:
                # Validate and parse with Pydantic
                super().__init__(**config_data)
            except ValidationError as e:
                raise ValueError(f"Invalid configuration: {e}") from e


def create_default_env_file(path: Path | None = None) -> Path:
    """Create a default environment file if it doesn't exist, and return its path."""
    env_path = ENV_PATH if path is None else path
    if not env_path.exists():
        env_path.write_text(DEFAULT_ENV_TEMPLATE)
    return env_path
