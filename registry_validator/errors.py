class BadConfigException(Exception):
    """Raise if the chain table cannot be used as configured"""

    pass


class MerkleTreeLoadError(Exception):
    """Raise if a merkle-tree.json file cannot be read or decoded"""

    pass
