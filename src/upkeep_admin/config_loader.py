"""Adapter manifest loader.

Loads ``upkeep_admin.yaml`` (or ``upkeep_admin.json``) from a configuration
directory and validates it into an ``AdapterConfig``.
"""

import json
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import ValidationError

from .exceptions import ManifestLoadError
from .schemas import AdapterConfig

MANIFEST_NAMES = ("upkeep_admin.yaml", "upkeep_admin.yml", "upkeep_admin.json")


def _find_manifest(config_dir: str) -> Optional[Path]:
    for name in MANIFEST_NAMES:
        path = Path(config_dir) / name
        if path.exists():
            return path
    return None


def load_adapter_manifest(config_dir: str) -> Dict:
    """Load the adapter manifest (required).

    Args:
        config_dir: Path to configuration directory

    Returns:
        Parsed manifest dict

    Raises:
        ManifestLoadError: If the file is missing, empty or not valid YAML/JSON
    """
    path = _find_manifest(config_dir)
    if path is None:
        raise ManifestLoadError(MANIFEST_NAMES[0], "File not found")
    try:
        with open(path, 'r') as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ManifestLoadError(path.name, f"Invalid YAML: {e}")
    except json.JSONDecodeError as e:
        raise ManifestLoadError(path.name, f"Invalid JSON: {e}")
    except OSError as e:
        raise ManifestLoadError(path.name, str(e))
    if data is None:
        raise ManifestLoadError(path.name, "Empty file")
    return data


def parse_adapter_config(data: Dict, file_name: str = MANIFEST_NAMES[0]) -> AdapterConfig:
    """Validate raw manifest data into an ``AdapterConfig``.

    Raises:
        ManifestLoadError: If the root is not a mapping or a field is invalid
    """
    if not isinstance(data, dict):
        raise ManifestLoadError(file_name, "Root must be a dict")
    try:
        return AdapterConfig.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ManifestLoadError(file_name, f"Invalid config: {problems}")


def load_adapter_config(config_dir: str) -> AdapterConfig:
    """Load and validate the adapter manifest in one step."""
    data = load_adapter_manifest(config_dir)
    path = _find_manifest(config_dir)
    return parse_adapter_config(data, path.name)
