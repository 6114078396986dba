from pathlib import Path

from registry_validator.config import (
    DEFAULT_CHAINS,
    DISTRIBUTION_FILENAME,
    MERKLE_TREE_FILENAME,
)
from registry_validator.discovery import (
    changed_files,
    find_registry_files,
    resolve_files,
)
from registry_validator.models import Chain, ChainTable
from registry_validator.test.conftest import DISTRIBUTOR, write_json


def test_changed_files():
    raw = "ethereum/0x1/distribution.json\n\n  base/0x2/merkle-tree.json  \nREADME.md\n"

    assert changed_files(raw) == [
        "ethereum/0x1/distribution.json",
        "base/0x2/merkle-tree.json",
        "README.md",
    ]
    assert changed_files("") == []
    assert changed_files(None) == []


def test_find_registry_files(registry):
    # a second distributor, a testnet folder, a stray file and an unknown chain
    write_json(registry / "base" / "0x0001" / DISTRIBUTION_FILENAME, {})
    write_json(registry / "mordor" / "0x0002" / DISTRIBUTION_FILENAME, {})
    write_json(registry / "solana" / "0x0003" / DISTRIBUTION_FILENAME, {})
    (registry / "base" / "notes.txt").write_text("not a distributor")
    (registry / "base" / "0x0004").mkdir()

    files = find_registry_files(DISTRIBUTION_FILENAME, registry, DEFAULT_CHAINS)

    assert files == [
        registry / "base" / "0x0001" / DISTRIBUTION_FILENAME,
        registry / "base" / DISTRIBUTOR / DISTRIBUTION_FILENAME,
        registry / "mordor" / "0x0002" / DISTRIBUTION_FILENAME,
    ]


def test_find_registry_files_follows_chain_table(registry):
    write_json(registry / "ethereum" / "0x0001" / MERKLE_TREE_FILENAME, {})
    table = ChainTable(
        chains=[Chain(name="ethereum", chainId=1), Chain(name="base", chainId=8453)]
    )

    assert find_registry_files(MERKLE_TREE_FILENAME, registry, table) == [
        registry / "ethereum" / "0x0001" / MERKLE_TREE_FILENAME,
        registry / "base" / DISTRIBUTOR / MERKLE_TREE_FILENAME,
    ]

    only_ethereum = ChainTable(chains=[Chain(name="ethereum", chainId=1)])
    assert find_registry_files(MERKLE_TREE_FILENAME, registry, only_ethereum) == [
        registry / "ethereum" / "0x0001" / MERKLE_TREE_FILENAME,
    ]


def test_resolve_files_uses_change_list(registry):
    changed = [
        "polygon/0x9/distribution.json",
        "README.md",
        f"base/{DISTRIBUTOR}/merkle-tree.json",
        "/abs/ethereum/0x1/distribution.json",
        "docs/distribution.json.md",
    ]

    assert resolve_files(DISTRIBUTION_FILENAME, registry, DEFAULT_CHAINS, changed) == [
        registry / "polygon" / "0x9" / DISTRIBUTION_FILENAME,
        Path("/abs/ethereum/0x1/distribution.json"),
    ]


def test_resolve_files_scans_without_matches(registry):
    changed = ["README.md", f"base/{DISTRIBUTOR}/merkle-tree.json"]

    assert resolve_files(DISTRIBUTION_FILENAME, registry, DEFAULT_CHAINS, changed) == [
        registry / "base" / DISTRIBUTOR / DISTRIBUTION_FILENAME,
    ]
    assert resolve_files(DISTRIBUTION_FILENAME, registry, DEFAULT_CHAINS, []) == [
        registry / "base" / DISTRIBUTOR / DISTRIBUTION_FILENAME,
    ]
