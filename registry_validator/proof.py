"""
Opt-in recomputation of standard-v1 trees.

The structural checks in `registry_validator.merkle` only compare stored roots. This module
rebuilds every hash the way OpenZeppelin's `StandardMerkleTree` does:

    leaf = keccak256(keccak256(abi.encode(leafEncoding, value)))
    node = keccak256(sort(left, right))

`tree` is a flattened binary tree, the children of node `k` live at `2k + 1` and `2k + 2`.
Run it only on documents that already passed `validate_merkle_tree`.
"""

from typing import Any

from eth_abi import encode
from eth_abi.exceptions import EncodingError, ParseError
from eth_utils import decode_hex, keccak

from registry_validator.models import (
    STANDARD_V1,
    Issue,
    IssueKind,
    MerkleTreeDocument,
    StandardValue,
)
from registry_validator.utils import display, is_number


def hash_pair(a: bytes, b: bytes) -> bytes:
    return keccak(b"".join(sorted([a, b])))


def coerce_arg(abi_type: str, item: Any) -> Any:
    """JSON stores uint256 amounts as strings and addresses as hex, eth_abi wants ints and bytes"""
    if abi_type.startswith(("uint", "int")):
        if isinstance(item, str):
            return int(item)
        if isinstance(item, float) and item.is_integer():
            return int(item)
    if abi_type == "address" and isinstance(item, str):
        return decode_hex(item)
    return item


def leaf_hash(leaf_encoding: list[str], value: list[Any]) -> bytes:
    if not all(isinstance(t, str) for t in leaf_encoding):
        raise ValueError(f"leafEncoding must only hold type names, got {leaf_encoding}")
    if len(leaf_encoding) != len(value):
        raise ValueError(
            f"{len(value)} items for {len(leaf_encoding)} types in {leaf_encoding}"
        )
    args = [coerce_arg(t, v) for t, v in zip(leaf_encoding, value)]
    return keccak(keccak(encode(leaf_encoding, args)))


def check_leaf_hashes(doc: MerkleTreeDocument, tree: list[bytes]) -> list[Issue]:
    issues = []
    for i, entry in enumerate(doc.values):  # type: ignore
        label = f"Entry {i}"
        value = StandardValue.model_validate(entry)
        try:
            leaf = leaf_hash(doc.leafEncoding, value.value)  # type: ignore
        except (EncodingError, ParseError, ValueError, TypeError) as e:
            issues.append(
                Issue(
                    kind=IssueKind.FORMAT,
                    field=label,
                    message=f"{label}: Cannot encode value with leafEncoding: {e}",
                )
            )
            continue

        tree_index = value.treeIndex
        if (
            not is_number(tree_index)
            or tree_index != int(tree_index)  # type: ignore
            or not 0 <= tree_index < len(tree)  # type: ignore
            or tree[int(tree_index)] != leaf  # type: ignore
        ):
            issues.append(
                Issue(
                    kind=IssueKind.CONSISTENCY,
                    field=label,
                    message=f"{label}: Leaf hash does not match tree node {display(tree_index)}",
                )
            )
    return issues


def check_internal_nodes(tree: list[bytes]) -> list[Issue]:
    issues = []
    for k, node in enumerate(tree):
        left, right = 2 * k + 1, 2 * k + 2
        if left >= len(tree):
            continue
        if right >= len(tree):
            issues.append(
                Issue(
                    kind=IssueKind.STRUCTURAL,
                    field=f"tree.{k}",
                    message=f"Tree node {k}: Missing right child",
                )
            )
        elif node != hash_pair(tree[left], tree[right]):
            issues.append(
                Issue(
                    kind=IssueKind.CONSISTENCY,
                    field=f"tree.{k}",
                    message=f"Tree node {k}: Hash does not match its children",
                )
            )
    return issues


def verify_standard_tree(doc: MerkleTreeDocument) -> tuple[Issue, ...]:
    """Recompute every leaf and internal node of a standard-v1 tree"""
    if doc.is_simple or doc.format != STANDARD_V1:
        return ()

    tree = [decode_hex(node) for node in doc.tree]  # type: ignore
    return (*check_leaf_hashes(doc, tree), *check_internal_nodes(tree))
