from pathlib import Path
from typing import Optional, Union

from registry_validator import env
from registry_validator.models import Chain, ChainTable

DISTRIBUTION_FILENAME = "distribution.json"
MERKLE_TREE_FILENAME = "merkle-tree.json"

DEFAULT_CHAINS = ChainTable(
    chains=[
        Chain(name="ethereum", chainId=1),
        Chain(name="classic", chainId=61),
        Chain(name="base", chainId=8453),
        Chain(name="optimism", chainId=10),
        Chain(name="arbitrum", chainId=42161),
        Chain(name="polygon", chainId=137),
        Chain(name="bsc", chainId=56),
        Chain(name="avalanche", chainId=43114),
        Chain(name="sepolia", chainId=11155111, testnet=True),
        Chain(name="mordor", chainId=63, testnet=True),
        Chain(name="arbitrum-sepolia", chainId=421614, testnet=True),
        Chain(name="optimism-sepolia", chainId=11155420, testnet=True),
        Chain(name="base-sepolia", chainId=84532, testnet=True),
        Chain(name="smartchain-testnet", chainId=97, testnet=True),
        Chain(name="polygon-amoy", chainId=80002, testnet=True),
        Chain(name="avalanchec-fuji", chainId=43113, testnet=True),
    ]
)


def load_chains(path: Optional[Union[str, Path]] = None) -> ChainTable:
    """
    Loads the chain table from `path`, or from `CHAINS_FILE` if no path is given.
    Falls back to the built in table when neither is set.
    """
    path = path or env.chains_file_var()
    if not path:
        return DEFAULT_CHAINS
    return ChainTable.model_validate_json(Path(path).read_text(encoding="utf-8"))
