import math
from pathlib import Path
from typing import Any, Optional, Union

from registry_validator.config import DISTRIBUTION_FILENAME
from registry_validator.distribution import load_distribution
from registry_validator.errors import MerkleTreeLoadError
from registry_validator.models import (
    Issue,
    IssueKind,
    Leaf,
    MerkleTreeDocument,
    StandardValue,
)
from registry_validator.utils import (
    display,
    duplicates,
    is_address,
    is_bytes32,
    is_number,
    is_numeric_string,
    read_json,
)

STANDARD_ARRAYS = ["values", "tree", "leafEncoding"]


def load_merkle_tree(path: Union[str, Path]) -> MerkleTreeDocument:
    """
    Read and decode a merkle-tree.json file.
    Unlike distribution files, a tree that can't be loaded is an error for the caller to handle.
    """
    try:
        data = read_json(path)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {display(data)}")
        return MerkleTreeDocument.model_validate(data)
    except (OSError, ValueError) as e:
        raise MerkleTreeLoadError(f"Failed to load merkle tree: {e}") from e


def expected_root_for(tree_path: Union[str, Path]) -> Optional[str]:
    """
    The `merkleRoot` of the distribution.json next to `tree_path`.
    None if that file is missing, can't be decoded or has no usable root.
    """
    distribution_path = Path(tree_path).parent / DISTRIBUTION_FILENAME
    if not distribution_path.is_file():
        return None
    try:
        record = load_distribution(distribution_path)
    except (OSError, ValueError):
        return None
    root = record.merkleRoot
    return root if isinstance(root, str) and root else None


def min_tree_length(value_count: int) -> int:
    """Smallest `tree` array we accept for `value_count` values"""
    if value_count <= 1:
        return 1
    return max(1, math.ceil(math.log2(value_count)) * 2)


def check_shape(doc: MerkleTreeDocument) -> list[Issue]:
    if doc.is_simple:
        if isinstance(doc.root, str) and doc.root:
            return []
        return [
            Issue(
                kind=IssueKind.SCHEMA,
                field="root",
                message="Missing or invalid root field",
            )
        ]

    return [
        Issue(
            kind=IssueKind.SCHEMA,
            field=name,
            message=f"Missing or invalid {name} array",
        )
        for name in STANDARD_ARRAYS
        if not isinstance(getattr(doc, name), list)
    ]


def check_root(doc: MerkleTreeDocument, expected_root: Optional[str]) -> list[Issue]:
    actual = doc.resolved_root
    if expected_root and actual != expected_root:
        return [
            Issue(
                kind=IssueKind.CONSISTENCY,
                field="root",
                message=f"Merkle root mismatch: {display(actual)} vs expected {expected_root}",
            )
        ]
    return []


def not_an_object(label: str, entry: Any) -> Issue:
    return Issue(
        kind=IssueKind.FORMAT,
        field=label,
        message=f"{label}: Expected an object, got: {display(entry)}",
    )


def check_address_and_amount(label: str, address: Any, amount: Any) -> list[Issue]:
    issues = []
    if not is_address(address):
        issues.append(
            Issue(
                kind=IssueKind.FORMAT,
                field=label,
                message=f"{label}: Invalid address format: {display(address)}",
            )
        )
    if not is_numeric_string(amount):
        issues.append(
            Issue(
                kind=IssueKind.FORMAT,
                field=label,
                message=f"{label}: Amount should be numeric string, got: {display(amount)}",
            )
        )
    return issues


def check_leaves(leaves: list[Any]) -> list[Issue]:
    issues = []
    for i, entry in enumerate(leaves):
        label = f"Leaf {i}"
        if not isinstance(entry, dict):
            issues.append(not_an_object(label, entry))
            continue

        leaf = Leaf.model_validate(entry)
        if not is_number(leaf.leafIndex):
            issues.append(
                Issue(
                    kind=IssueKind.FORMAT,
                    field=label,
                    message=f"{label}: Missing or invalid leafIndex",
                )
            )
        issues += check_address_and_amount(label, leaf.address, leaf.amount)
    return issues


def check_values(values: list[Any]) -> list[Issue]:
    issues = []
    for i, entry in enumerate(values):
        label = f"Entry {i}"
        if not isinstance(entry, dict):
            issues.append(not_an_object(label, entry))
            continue

        value = StandardValue.model_validate(entry)
        if not isinstance(value.value, list) or len(value.value) != 3:
            issues.append(
                Issue(
                    kind=IssueKind.FORMAT,
                    field=label,
                    message=f"{label}: value should be an array of 3 elements, got: {display(value.value)}",
                )
            )
        else:
            index, address, amount = value.value
            if not is_number(index):
                issues.append(
                    Issue(
                        kind=IssueKind.FORMAT,
                        field=label,
                        message=f"{label}: Missing or invalid value index",
                    )
                )
            issues += check_address_and_amount(label, address, amount)

        if not is_number(value.treeIndex):
            issues.append(
                Issue(
                    kind=IssueKind.FORMAT,
                    field=label,
                    message=f"{label}: Missing or invalid treeIndex",
                )
            )
    return issues


def check_tree_nodes(tree: list[Any]) -> list[Issue]:
    return [
        Issue(
            kind=IssueKind.FORMAT,
            field=f"tree.{i}",
            message=f"Tree node {i}: Invalid bytes32 format: {display(node)}",
        )
        for i, node in enumerate(tree)
        if not is_bytes32(node)
    ]


def leaf_indices(leaves: list[Any]) -> list[Any]:
    return [
        entry["leafIndex"]
        for entry in leaves
        if isinstance(entry, dict) and is_number(entry.get("leafIndex"))
    ]


def value_indices(values: list[Any]) -> list[Any]:
    return [
        entry["value"][0]
        for entry in values
        if isinstance(entry, dict)
        and isinstance(entry.get("value"), list)
        and len(entry["value"]) == 3
        and is_number(entry["value"][0])
    ]


def check_duplicates(indices: list[Any], description: str) -> list[Issue]:
    repeated = duplicates(indices)
    if not repeated:
        return []
    return [
        Issue(
            kind=IssueKind.STRUCTURAL,
            message=f"Duplicate {description} found: {', '.join(display(i) for i in repeated)}",
        )
    ]


def check_tree_length(tree: list[Any], value_count: int) -> list[Issue]:
    minimum = min_tree_length(value_count)
    if len(tree) >= minimum:
        return []
    return [
        Issue(
            kind=IssueKind.STRUCTURAL,
            field="tree",
            message=f"Tree array too short: {len(tree)} nodes for {value_count} values, expected at least {minimum}",
        )
    ]


def validate_merkle_tree(
    doc: MerkleTreeDocument, expected_root: Optional[str] = None
) -> tuple[Issue, ...]:
    """
    Structural checks on a decoded merkle tree.

    :param `expected_root`: merkleRoot from the sibling distribution.json, if there is one

    Only the stored root is compared, leaves are never hashed here.
    See `registry_validator.proof` for recomputing the tree.
    """
    issues = check_shape(doc) + check_root(doc, expected_root)

    if doc.is_simple:
        leaves: list[Any] = doc.leaves  # type: ignore
        issues += check_leaves(leaves)
        issues += check_duplicates(leaf_indices(leaves), "leafIndex values")
    elif isinstance(doc.values, list) and isinstance(doc.tree, list):
        issues += check_values(doc.values)
        issues += check_tree_nodes(doc.tree)
        issues += check_duplicates(value_indices(doc.values), "value indices")
        issues += check_tree_length(doc.tree, len(doc.values))

    return tuple(issues)
