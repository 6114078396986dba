from typing import Optional

from pydantic import BaseModel, field_validator

from registry_validator.errors import BadConfigException
from registry_validator.utils import duplicates


class Chain(BaseModel):
    """
    A network the registry accepts distributions for.
    :param `name`: folder name at the root of the registry, also used as `chainName`
    :param `chainId`: EIP-155 chain id
    """

    name: str
    chainId: int
    testnet: bool = False


class ChainTable(BaseModel):
    """
    Every supported chain. Drives both the chainId check on distribution.json
    and which folders get scanned when no change list is supplied.
    """

    chains: list[Chain]

    @field_validator("chains")
    @classmethod
    def unique_names(cls, chains: list[Chain]) -> list[Chain]:
        repeated = duplicates([c.name for c in chains])
        if repeated:
            raise BadConfigException(f"Duplicate chain names: {', '.join(repeated)}")
        return chains

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.chains]

    def chain_id(self, name: str) -> Optional[int]:
        for chain in self.chains:
            if chain.name == name:
                return chain.chainId
        return None

    def __contains__(self, name: object) -> bool:
        return name in self.names
