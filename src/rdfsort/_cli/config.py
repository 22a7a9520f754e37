"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast


class ConfigError(Exception):
    """Error in rdfsort configuration."""


@dataclass(slots=True, frozen=True)
class RdfsortConfig:
    """Configuration loaded from pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    strict: bool = False
    namespaces: dict[str, str] = field(default_factory=dict)
    output: Path | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _parse_namespaces(value: object) -> dict[str, str]:
    """Parse the namespaces table from config.

    Raises:
        ConfigError: If the value is not a table of strings

    """
    if not isinstance(value, dict):
        msg = "Invalid [tool.rdfsort].namespaces: expected table of abbreviation = URI"
        raise ConfigError(msg)

    namespaces: dict[str, str] = {}
    for abbreviation, uri in cast("dict[str, object]", value).items():
        if not isinstance(uri, str):
            msg = f"Invalid [tool.rdfsort].namespaces.{abbreviation}: expected string URI"
            raise ConfigError(msg)
        namespaces[abbreviation] = uri
    return namespaces


def load_config(pyproject_path: Path) -> RdfsortConfig:
    """Load and validate [tool.rdfsort] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed RdfsortConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    rdfsort_section = data.get("tool", {}).get("rdfsort", {})

    if not rdfsort_section:
        return RdfsortConfig(project_root=project_root)

    strict = rdfsort_section.get("strict", False)
    if not isinstance(strict, bool):
        msg = "Invalid [tool.rdfsort].strict: expected boolean"
        raise ConfigError(msg)

    namespaces: dict[str, str] = {}
    if "namespaces" in rdfsort_section:
        namespaces = _parse_namespaces(rdfsort_section["namespaces"])

    output_path: Path | None = None
    if "output" in rdfsort_section:
        output_value = rdfsort_section["output"]
        if not isinstance(output_value, str):
            msg = "Invalid [tool.rdfsort].output: expected string path"
            raise ConfigError(msg)
        output_path = Path(output_value)
        if not output_path.is_absolute():
            output_path = project_root / output_path

    return RdfsortConfig(
        strict=strict,
        namespaces=namespaces,
        output=output_path,
        project_root=project_root,
    )


def get_config() -> RdfsortConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        RdfsortConfig (may be empty if no pyproject.toml or no [tool.rdfsort] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return RdfsortConfig()
    return load_config(pyproject_path)
