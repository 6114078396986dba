import sys
from pathlib import Path
from typing import Optional, Sequence, Union

import fire

from registry_validator import env
from registry_validator.config import (
    DEFAULT_CHAINS,
    DISTRIBUTION_FILENAME,
    MERKLE_TREE_FILENAME,
    load_chains,
)
from registry_validator.discovery import changed_files, resolve_files
from registry_validator.distribution import validate_distribution_file
from registry_validator.errors import MerkleTreeLoadError
from registry_validator.merkle import (
    expected_root_for,
    load_merkle_tree,
    validate_merkle_tree,
)
from registry_validator.models import ChainTable, Issue
from registry_validator.proof import verify_standard_tree

FilePath = Union[str, Path]


def print_issues(issues: Sequence[Issue]) -> None:
    print("  ❌ Errors found:", file=sys.stderr)
    for issue in issues:
        print(f"    - {issue}", file=sys.stderr)


def run_distributions(
    files: Sequence[FilePath], chains: ChainTable = DEFAULT_CHAINS
) -> bool:
    """Validate each distribution.json in turn, returns True if any of them had errors"""
    has_errors = False

    for file in files:
        print(f"\nValidating: {file}")
        issues = validate_distribution_file(file, chains)

        if issues:
            has_errors = True
            print_issues(issues)
        else:
            print("  ✓ Valid")

    if not has_errors:
        print("\n✅ All distributions valid")
    return has_errors


def run_merkle_trees(files: Sequence[FilePath], verify_hashes: bool = False) -> bool:
    """
    Validate each merkle-tree.json against its own structure and the root in the
    neighbouring distribution.json. Returns True if any of them had errors.

    :param `verify_hashes`: also rebuild standard-v1 trees from their leaves
    """
    has_errors = False

    for file in files:
        print(f"\nValidating merkle tree: {file}")

        try:
            doc = load_merkle_tree(file)
        except MerkleTreeLoadError as e:
            has_errors = True
            print(f"  ❌ Error: {e}", file=sys.stderr)
            continue

        issues = validate_merkle_tree(doc, expected_root_for(file))
        # hashing a tree with a broken shape would only repeat the errors above
        if verify_hashes and not issues:
            issues = verify_standard_tree(doc)

        if issues:
            has_errors = True
            print_issues(issues)
        else:
            print("  ✓ Valid")
            print(f"  - Leaves: {doc.entry_count}")
            print(f"  - Root: {doc.resolved_root}")

    if not has_errors:
        print("\n✅ All merkle trees valid")
    return has_errors


def _files_for(filename: str, root: str, chains: ChainTable):
    return resolve_files(filename, root, chains, changed_files(env.changed_files_var()))


def distributions(root: Optional[str] = None, chains: Optional[str] = None) -> None:
    """
    Validate distribution.json files.

    :param `root`: registry directory, defaults to REGISTRY_ROOT or the working directory
    :param `chains`: JSON file replacing the built in chain table
    """
    root = root or env.registry_root_var()
    table = load_chains(chains)
    has_errors = run_distributions(_files_for(DISTRIBUTION_FILENAME, root, table), table)
    sys.exit(1 if has_errors else 0)


def merkle(
    root: Optional[str] = None,
    chains: Optional[str] = None,
    verify_hashes: bool = False,
) -> None:
    """Validate merkle-tree.json files, see `distributions` for the arguments"""
    root = root or env.registry_root_var()
    table = load_chains(chains)
    has_errors = run_merkle_trees(
        _files_for(MERKLE_TREE_FILENAME, root, table), verify_hashes
    )
    sys.exit(1 if has_errors else 0)


def check_all(
    root: Optional[str] = None,
    chains: Optional[str] = None,
    verify_hashes: bool = False,
) -> None:
    """Validate distributions then merkle trees, fails if either step found errors"""
    root = root or env.registry_root_var()
    table = load_chains(chains)
    distribution_errors = run_distributions(
        _files_for(DISTRIBUTION_FILENAME, root, table), table
    )
    merkle_errors = run_merkle_trees(
        _files_for(MERKLE_TREE_FILENAME, root, table), verify_hashes
    )
    sys.exit(1 if distribution_errors or merkle_errors else 0)


def main() -> None:
    try:
        fire.Fire(
            {
                "distributions": distributions,
                "merkle": merkle,
                "all": check_all,
            }
        )
    except Exception as e:
        print(e, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
