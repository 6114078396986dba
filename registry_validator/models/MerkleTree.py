from __future__ import annotations

from typing import Optional

from pydantic import JsonValue

from registry_validator.models.Record import JsonRecord
from registry_validator.models.types import ShapeName

STANDARD_V1 = "standard-v1"


class Leaf(JsonRecord):
    """One recipient in a simple shape tree"""

    leafIndex: Optional[JsonValue] = None
    address: Optional[JsonValue] = None
    amount: Optional[JsonValue] = None


class StandardValue(JsonRecord):
    """
    One recipient in a standard-v1 tree
    :param `value`: `[index, address, amount]`, encoded according to `leafEncoding`
    :param `treeIndex`: position of the leaf hash in the flattened `tree` array
    """

    value: Optional[JsonValue] = None
    treeIndex: Optional[JsonValue] = None


class MerkleTreeDocument(JsonRecord):
    """
    Contents of a merkle-tree.json file. Two shapes are accepted:

    simple: `{root, leaves: [{leafIndex, address, amount}]}`
    standard: `{format: "standard-v1", tree: [...], values: [{value, treeIndex}], leafEncoding: [...]}`

    In the standard shape the root is not stored separately, it is the first node of `tree`.
    """

    root: Optional[JsonValue] = None
    leaves: Optional[JsonValue] = None
    format: Optional[JsonValue] = None
    tree: Optional[JsonValue] = None
    values: Optional[JsonValue] = None
    leafEncoding: Optional[JsonValue] = None

    @property
    def shape(self) -> ShapeName:
        return "simple" if isinstance(self.leaves, list) else "standard"

    @property
    def is_simple(self) -> bool:
        return self.shape == "simple"

    @property
    def resolved_root(self) -> Optional[JsonValue]:
        if self.format == STANDARD_V1 and isinstance(self.tree, list) and self.tree:
            return self.tree[0]
        return self.root

    @property
    def entry_count(self) -> int:
        entries = self.leaves if self.is_simple else self.values
        return len(entries) if isinstance(entries, list) else 0
