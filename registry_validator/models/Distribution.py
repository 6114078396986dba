from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import JsonValue

from registry_validator.models.Record import JsonRecord


class TokenType(str, Enum):
    NATIVE = "NATIVE"
    ERC20 = "ERC20"
    ERC223 = "ERC223"


TOKEN_TYPES = [t.value for t in TokenType]


class TokenRecord(JsonRecord):
    """The token being distributed, nested under `token` in distribution.json"""

    address: Optional[JsonValue] = None
    name: Optional[JsonValue] = None
    symbol: Optional[JsonValue] = None
    decimals: Optional[JsonValue] = None
    type: Optional[JsonValue] = None


class DistributionRecord(JsonRecord):
    """
    Metadata for a single distribution, stored in `<chain>/<distributor>/distribution.json`.
    Published once and never edited afterwards.

    :param `chainId`: must match the id the chain table gives `chainName`
    :param `merkleRoot`: root of the sibling merkle-tree.json
    :param `totalAmount`: sum of all leaf amounts, as a numeric string
    """

    chainId: Optional[JsonValue] = None
    chainName: Optional[JsonValue] = None
    name: Optional[JsonValue] = None
    description: Optional[JsonValue] = None
    token: Optional[JsonValue] = None
    distributor: Optional[JsonValue] = None
    registry: Optional[JsonValue] = None
    merkleRoot: Optional[JsonValue] = None
    createdAt: Optional[JsonValue] = None
    totalRecipients: Optional[JsonValue] = None
    totalAmount: Optional[JsonValue] = None
    createdBy: Optional[JsonValue] = None

    @property
    def token_record(self) -> Optional[TokenRecord]:
        """The decoded token, or None if `token` is missing or not an object"""
        if not isinstance(self.token, dict):
            return None
        return TokenRecord.model_validate(self.token)
