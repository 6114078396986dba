import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def env_var(accessor: str, default: Optional[str] = None) -> Optional[str]:
    """
    Fetch an environment variable, falling back to `default`
    if it is not set or empty
    """
    var = os.environ.get(accessor)
    if not var:
        return default
    return var


def changed_files_var() -> str:
    """Newline separated list of files touched by the pull request, set by CI"""
    return env_var("CHANGED_FILES", "") or ""


def chains_file_var() -> Optional[str]:
    return env_var("CHAINS_FILE")


def registry_root_var() -> str:
    return env_var("REGISTRY_ROOT", ".") or "."
