from pathlib import Path
from typing import Optional, Union

from registry_validator.models import ChainTable


def changed_files(raw: Optional[str]) -> list[str]:
    """Split the newline separated change list CI hands us, dropping blank lines"""
    return [line.strip() for line in (raw or "").splitlines() if line.strip()]


def find_registry_files(
    filename: str, root: Union[str, Path], chains: ChainTable
) -> list[Path]:
    """
    Every `<root>/<chain>/<distributor>/<filename>` for the chains in the table.
    Chains are visited in table order, distributor folders in name order.
    """
    files = []
    for chain in chains.names:
        chain_path = Path(root) / chain
        if not chain_path.is_dir():
            continue

        for distributor_path in sorted(chain_path.iterdir()):
            if not distributor_path.is_dir():
                continue
            candidate = distributor_path / filename
            if candidate.is_file():
                files.append(candidate)
    return files


def resolve_files(
    filename: str,
    root: Union[str, Path],
    chains: ChainTable,
    changed: list[str],
) -> list[Path]:
    """
    The files to validate: entries of the change list named `filename`, in list order.
    When none of the changed files match, the whole registry is scanned.
    """
    matching = [Path(f) for f in changed if Path(f).name == filename]
    if not matching:
        return find_registry_files(filename, root, chains)
    return [f if f.is_absolute() else Path(root) / f for f in matching]
