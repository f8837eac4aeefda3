"""Version lookup for typegrammar."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Installed distribution version, else the source checkout's pyproject version."""
    try:
        return version("typegrammar")
    except PackageNotFoundError:
        pass
    if PYPROJECT.exists():
        with PYPROJECT.open("rb") as f:
            return tomllib.load(f).get("project", {}).get("version", "0.0.0")
    return "0.0.0"
