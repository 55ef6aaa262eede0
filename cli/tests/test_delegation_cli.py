"""
Test suite for `cli.delegation` module.
"""

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from delegation_base_types import Address, to_json
from delegation_types import (
    ANY_BENEFICIARY,
    ROOT_AUTHORITY,
    Caveat,
    Delegation,
    create_delegation,
    encode_delegation,
)

from ..delegation import delegation

ALICE = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
BOB = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"
CAROL = "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB"
ENFORCER = "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb"


@pytest.fixture
def runner() -> CliRunner:
    """Provides a Click CliRunner for invoking command-line interfaces."""
    return CliRunner()


@pytest.fixture
def root() -> Delegation:
    """Root delegation from Alice to Bob with a single caveat."""
    return create_delegation(
        delegator=ALICE,
        delegate=BOB,
        caveats=[Caveat(enforcer=ENFORCER, terms="0x01")],
    )


def write_json(path: Path, data: Any) -> str:
    """Write the data as JSON to the given path and return the path as a string."""
    path.write_text(json.dumps(data))
    return str(path)


def test_create_root_delegation(runner: CliRunner, tmp_path: Path, root: Delegation):
    """
    Test the creation of a root delegation with explicit caveats.
    """
    caveats_file = write_json(
        tmp_path / "caveats.json", [{"enforcer": ENFORCER.lower(), "terms": "0x01"}]
    )
    result = runner.invoke(
        delegation,
        ["create", "--delegator", ALICE, "--delegate", BOB, "--caveats", caveats_file],
    )
    assert result.exit_code == 0, result.output
    created = Delegation.model_validate(json.loads(result.stdout))
    assert created == root
    assert created.authority == ROOT_AUTHORITY


def test_create_chained_delegation(runner: CliRunner, tmp_path: Path, root: Delegation):
    """
    Test that the authority of a created delegation is the hash of its parent.
    """
    parent_file = write_json(tmp_path / "parent.json", to_json(root))
    result = runner.invoke(
        delegation,
        ["create", "--delegator", BOB, "--delegate", CAROL, "--parent", parent_file],
    )
    assert result.exit_code == 0, result.output
    assert Delegation.model_validate(json.loads(result.stdout)).authority == root.hash()

    result = runner.invoke(
        delegation,
        ["create", "--delegator", BOB, "--open", "--parent-hash", str(root.hash())],
    )
    assert result.exit_code == 0, result.output
    created = Delegation.model_validate(json.loads(result.stdout))
    assert created.authority == root.hash()
    assert created.delegate == ANY_BENEFICIARY


def test_create_with_named_caveats(runner: CliRunner, tmp_path: Path):
    """
    Test the creation of a delegation with caveats resolved from the environment file.
    """
    env_path = tmp_path / "env.yaml"
    env_path.write_text(f'caveat_enforcers:\n  LimitedCallsEnforcer: "{ENFORCER}"\n')
    caveats_file = write_json(
        tmp_path / "caveats.json", [{"name": "limitedCalls", "params": {"limit": 2}}]
    )
    result = runner.invoke(
        delegation,
        [
            "create",
            "--delegator",
            ALICE,
            "--delegate",
            BOB,
            "--caveats",
            caveats_file,
            "--env",
            str(env_path),
        ],
    )
    assert result.exit_code == 0, result.output
    (caveat,) = Delegation.model_validate(json.loads(result.stdout)).caveats
    assert caveat.enforcer == Address(ENFORCER)
    assert caveat.terms == (2).to_bytes(32, "big")


def test_create_with_unknown_caveat(runner: CliRunner, tmp_path: Path):
    """
    Test that a named caveat missing from the environment file is reported.
    """
    env_path = tmp_path / "env.yaml"
    env_path.write_text("caveat_enforcers: {}\n")
    caveats_file = write_json(tmp_path / "caveats.json", [{"name": "limitedCalls"}])
    result = runner.invoke(
        delegation,
        ["create", "--delegator", ALICE, "--delegate", BOB, "--caveats", caveats_file]
        + ["--env", str(env_path)],
    )
    assert result.exit_code == 1
    assert "UnknownCaveatError" in result.output


def test_create_invalid_address(runner: CliRunner):
    """
    Test that a malformed address is reported as an error.
    """
    result = runner.invoke(delegation, ["create", "--delegator", "0x1234", "--delegate", BOB])
    assert result.exit_code == 1
    assert "InvalidAddressError" in result.output


@pytest.mark.parametrize(
    "args",
    [
        pytest.param(["--delegate", BOB, "--open"], id="delegate_and_open"),
        pytest.param([], id="neither_delegate_nor_open"),
        pytest.param(
            ["--delegate", BOB, "--parent-hash", "0x01", "--parent", __file__],
            id="parent_and_parent_hash",
        ),
    ],
)
def test_create_usage_errors(runner: CliRunner, args: list):
    """
    Test that conflicting options are rejected.
    """
    result = runner.invoke(delegation, ["create", "--delegator", ALICE] + args)
    assert result.exit_code == 2


def test_hash(runner: CliRunner, tmp_path: Path, root: Delegation):
    """
    Test that the printed hash does not depend on the signature.
    """
    signed = root.with_signature("0x" + "ab" * 65)
    result = runner.invoke(delegation, ["hash", write_json(tmp_path / "d.json", to_json(signed))])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == str(root.hash())


def test_encode_and_decode(runner: CliRunner, tmp_path: Path, root: Delegation):
    """
    Test the encoding of a chain and the decoding of the resulting permission context.
    """
    leaf = create_delegation(delegator=BOB, delegate=CAROL, caveats=[], parent_delegation=root)
    chain_file = write_json(tmp_path / "chain.json", to_json([leaf, root]))

    result = runner.invoke(delegation, ["encode", chain_file])
    assert result.exit_code == 0, result.output
    permission_context = result.stdout.strip()
    assert permission_context == str(encode_delegation([leaf, root]))

    result = runner.invoke(delegation, ["decode", permission_context])
    assert result.exit_code == 0, result.output
    decoded = json.loads(result.stdout)
    assert [item["delegator"] for item in decoded] == [BOB, ALICE]
    assert decoded[0]["authority"] == str(root.hash())


def test_encode_single_delegation(runner: CliRunner, tmp_path: Path, root: Delegation):
    """
    Test that a single delegation is encoded as a chain of one.
    """
    result = runner.invoke(delegation, ["encode", write_json(tmp_path / "d.json", to_json(root))])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == str(encode_delegation([root]))


def test_contexts(runner: CliRunner, tmp_path: Path, root: Delegation):
    """
    Test that one permission context is printed per chain.
    """
    chains_file = write_json(tmp_path / "chains.json", [[to_json(root)], []])
    result = runner.invoke(delegation, ["contexts", chains_file])
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == [
        str(encode_delegation([root])),
        str(encode_delegation([])),
    ]


def test_decode_malformed(runner: CliRunner):
    """
    Test that data that is not a permission context is reported as an error.
    """
    result = runner.invoke(delegation, ["decode", "0x1234"])
    assert result.exit_code == 1
    assert "EncodingTypeMismatchError" in result.output


def test_make_env(runner: CliRunner, tmp_path: Path):
    """
    Test the creation of the default environment file.
    """
    env_path = tmp_path / "env.yaml"
    result = runner.invoke(delegation, ["make-env", "--path", str(env_path)])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == str(env_path)
    assert "caveat_enforcers" in env_path.read_text()


def test_verbose_hash(runner: CliRunner, tmp_path: Path, root: Delegation):
    """
    Test that verbose logging does not change the printed hash.
    """
    result = runner.invoke(
        delegation, ["-v", "hash", write_json(tmp_path / "d.json", to_json(root))]
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.strip().splitlines()[-1] == str(root.hash())


@pytest.mark.parametrize(
    "caveats",
    [
        pytest.param([1], id="number"),
        pytest.param(["limitedCalls"], id="string"),
        pytest.param([[ENFORCER, "0x01"]], id="list"),
        pytest.param([{"name": "limitedCalls", "params": [2]}], id="params_not_an_object"),
    ],
)
def test_create_with_malformed_caveat_entry(runner: CliRunner, tmp_path: Path, caveats: list):
    """
    Test that caveat entries that are not JSON objects are reported as usage errors.
    """
    caveats_file = write_json(tmp_path / "caveats.json", caveats)
    result = runner.invoke(
        delegation,
        ["create", "--delegator", ALICE, "--delegate", BOB, "--caveats", caveats_file],
    )
    assert result.exit_code == 2
    assert isinstance(result.exception, SystemExit)
    assert "Expected a JSON object per caveat" in result.output
