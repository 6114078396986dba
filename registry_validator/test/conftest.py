import json
import shutil
from pathlib import Path
from typing import Any

import pytest

STUBS = Path(__file__).parent / "stubs"

DISTRIBUTOR = "0xfDe38ad4bBbeC867e6cb4Bb31FbFB2074c959A83"
ROOT_A = "0x" + "aa" * 32
ROOT_B = "0x" + "bb" * 32


@pytest.fixture()
def ADDRESSES():
    return [
        "0x9bc33f6155eFAcc290c3C50E9B5b24b668562732",
        "0xfDe38ad4bBbeC867e6cb4Bb31FbFB2074c959A83",
        "0x8BB4C0b502f869af3B25166930507a6E8c3038D4",
        "0x7Ac54A0406FA2B465E0D57C66597BE83A4b149fC",
        "0xdeA708968f8dd520f5e2F0aB6785F28c98521ca8",
    ]


def load_stub(name: str) -> Any:
    with open(STUBS / name) as j:
        return json.load(j)


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=4)
    return path


@pytest.fixture
def distribution() -> dict[str, Any]:
    return load_stub("base/distribution.json")


@pytest.fixture
def simple_tree() -> dict[str, Any]:
    return load_stub("base/merkle-tree.json")


@pytest.fixture
def standard_tree() -> dict[str, Any]:
    return load_stub("standard/merkle-tree.json")


@pytest.fixture
def registry(tmp_path, monkeypatch) -> Path:
    """A registry holding one valid distribution on base, with no change list set"""
    monkeypatch.delenv("CHANGED_FILES", raising=False)
    monkeypatch.delenv("CHAINS_FILE", raising=False)
    monkeypatch.delenv("REGISTRY_ROOT", raising=False)

    folder = tmp_path / "base" / DISTRIBUTOR
    folder.mkdir(parents=True)
    shutil.copy(STUBS / "base" / "distribution.json", folder / "distribution.json")
    shutil.copy(STUBS / "base" / "merkle-tree.json", folder / "merkle-tree.json")
    return tmp_path
