"""
CLI tool to create, hash and encode delegations stored as JSON.
"""

import functools
import json
import logging
from pathlib import Path
from typing import IO, Any, Callable, List, Optional

import click

from config import DelegationEnvironment, EnvConfig, create_default_env_file
from delegation_base_types import to_json
from delegation_exceptions import DelegationException
from delegation_types import (
    CaveatBuilder,
    Delegation,
    ParentDelegation,
    create_delegation,
    create_open_delegation,
    decode_delegation,
    encode_delegation,
    encode_permission_contexts,
)
from logger import setup_logger


def delegation_errors_as_click_errors(f: Callable) -> Callable:
    """Report delegation, malformed input and missing file errors as click errors."""

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except (DelegationException, ValueError, FileNotFoundError) as e:
            raise click.ClickException(f"{e.__class__.__name__}: {e}") from e

    return wrapper


def load_chain(data: Any) -> List[Delegation]:
    """Load a delegation chain from a JSON list, or a single delegation from a JSON object."""
    if isinstance(data, dict):
        return [Delegation.model_validate(data)]
    if not isinstance(data, list):
        raise click.BadParameter(f"Expected a JSON object or list, got {type(data).__name__}")
    return [Delegation.model_validate(item) for item in data]


def load_caveats(caveats_file: Optional[IO[str]], env_path: Optional[Path]) -> CaveatBuilder:
    """
    Load caveats from a JSON list.

    Each entry is either a caveat (`enforcer`, `terms`, `args`) or a named caveat
    (`name`, `params`) whose enforcer is looked up in the environment file.
    """
    entries = json.load(caveats_file) if caveats_file is not None else []
    if not isinstance(entries, list):
        raise click.BadParameter("Expected a JSON list of caveats", param_hint="--caveats")
    for entry in entries:
        if not isinstance(entry, dict) or not isinstance(entry.get("params", {}), dict):
            raise click.BadParameter("Expected a JSON object per caveat", param_hint="--caveats")
    environment: DelegationEnvironment = DelegationEnvironment()
    if any("name" in entry for entry in entries):
        environment = EnvConfig(env_path)
    builder = CaveatBuilder(environment, allow_empty_caveats=True)
    for entry in entries:
        if "name" in entry:
            builder.add_caveat(entry["name"], **entry.get("params", {}))
        else:
            builder.add_caveat(entry)
    return builder


@click.group("delegation", context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log hashing and encoding.")
def delegation(verbose: bool):
    """
    Create, hash and encode delegations of the delegation framework.

    Delegations are read from JSON files using the camel case field names of the delegation
    manager (`delegate`, `delegator`, `authority`, `caveats`, `salt`, `signature`).
    """
    setup_logger(__name__, level=logging.DEBUG if verbose else None)


@delegation.command("hash", short_help="Print the hash of a delegation.")
@click.argument("delegation_file", type=click.File("r"))
@delegation_errors_as_click_errors
def hash_delegation(delegation_file: IO[str]):
    """
    Print the hash of the delegation in DELEGATION_FILE.

    This is the digest signed by the delegator; the signature of the delegation is ignored.
    """
    click.echo(str(Delegation.model_validate(json.load(delegation_file)).hash()))


@delegation.command(short_help="Encode a delegation chain into a permission context.")
@click.argument("chain_file", type=click.File("r"))
@delegation_errors_as_click_errors
def encode(chain_file: IO[str]):
    """
    Encode the delegation chain in CHAIN_FILE into a permission context.

    CHAIN_FILE contains a JSON list of delegations ordered from leaf to root, or a single
    delegation.
    """
    click.echo(str(encode_delegation(load_chain(json.load(chain_file)))))


@delegation.command(short_help="Encode several delegation chains.")
@click.argument("chains_file", type=click.File("r"))
@delegation_errors_as_click_errors
def contexts(chains_file: IO[str]):
    """
    Encode each delegation chain in CHAINS_FILE, printing one permission context per line.
    """
    data = json.load(chains_file)
    if not isinstance(data, list):
        raise click.BadParameter("Expected a JSON list of delegation chains")
    for permission_context in encode_permission_contexts([load_chain(chain) for chain in data]):
        click.echo(str(permission_context))


@delegation.command(short_help="Decode a permission context.")
@click.argument("hex_string")
@delegation_errors_as_click_errors
def decode(hex_string: str):
    """
    Decode the permission context HEX_STRING and print its delegations as JSON.
    """
    try:
        delegation_structs = decode_delegation(hex_string)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="HEX_STRING") from e
    click.echo(json.dumps(to_json(delegation_structs), indent=2))


@delegation.command(short_help="Create an unsigned delegation.")
@click.option("--delegator", required=True, help="Address granting the delegation.")
@click.option("--delegate", default=None, help="Address receiving the delegation.")
@click.option(
    "--open",
    "open_delegation",
    is_flag=True,
    default=False,
    help="Create an open delegation that can be redeemed by anyone.",
)
@click.option(
    "--parent",
    "parent_file",
    type=click.File("r"),
    default=None,
    help="JSON file of the parent delegation.",
)
@click.option("--parent-hash", default=None, help="Precomputed hash of the parent delegation.")
@click.option(
    "--caveats",
    "caveats_file",
    type=click.File("r"),
    default=None,
    help="JSON file with the list of caveats.",
)
@click.option(
    "--env",
    "env_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Environment file with the caveat enforcer addresses.",
)
@delegation_errors_as_click_errors
def create(
    delegator: str,
    delegate: Optional[str],
    open_delegation: bool,
    parent_file: Optional[IO[str]],
    parent_hash: Optional[str],
    caveats_file: Optional[IO[str]],
    env_path: Optional[Path],
):
    """
    Create an unsigned delegation and print it as JSON.

    Without a parent, the delegation is a root delegation.
    """
    if open_delegation == (delegate is not None):
        raise click.UsageError("Exactly one of --delegate or --open must be given.")
    if parent_file is not None and parent_hash is not None:
        raise click.UsageError("--parent and --parent-hash are mutually exclusive.")

    parent: ParentDelegation = parent_hash
    if parent_file is not None:
        parent = Delegation.model_validate(json.load(parent_file))
    caveats = load_caveats(caveats_file, env_path)

    if open_delegation:
        new_delegation = create_open_delegation(
            delegator=delegator, caveats=caveats, parent_delegation=parent
        )
    else:
        assert delegate is not None
        new_delegation = create_delegation(
            delegator=delegator, delegate=delegate, caveats=caveats, parent_delegation=parent
        )
    click.echo(json.dumps(to_json(new_delegation), indent=2))


@delegation.command("make-env", short_help="Create a default environment file.")
@click.option(
    "--path",
    "env_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Location of the environment file.",
)
def make_env(env_path: Optional[Path]):
    """
    Create a default environment file listing the caveat enforcer addresses, if missing.
    """
    click.echo(str(create_default_env_file(env_path)))


if __name__ == "__main__":
    delegation()
