from __future__ import annotations
from dataclasses import dataclass
from os import getenv
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

import yaml

from ..constants import DEFAULT_API_VERSION, DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

API_KEY_ENV = "CLARIFAI_API_KEY"
_KNOWN_KEYS = {"api_key", "base_url", "api_version", "timeout"}


@dataclass(frozen=True)
class ClientConfig:
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    timeout: float = 30.0


def load_config(config_path: Union[Path, str]) -> ClientConfig:
    """
    Load client settings from a YAML file.

    The file must contain a top-level ``clarifai`` mapping. When it carries no
    ``api_key`` the value of the CLARIFAI_API_KEY environment variable is used.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict) or 'clarifai' not in raw:
        raise ValueError("Config missing 'clarifai'")

    section: Dict[str, Any] = raw['clarifai'] or {}
    if not isinstance(section, dict):
        raise ValueError("'clarifai' must be a mapping")

    unknown = set(section) - _KNOWN_KEYS
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    timeout = section.get('timeout', ClientConfig.timeout)
    try:
        timeout = float(timeout)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid timeout: {timeout!r}") from e
    if timeout <= 0:
        raise ValueError(f"Timeout must be positive, got {timeout}")

    config = ClientConfig(
        api_key=section.get('api_key') or getenv(API_KEY_ENV),
        base_url=section.get('base_url') or DEFAULT_BASE_URL,
        api_version=section.get('api_version') or DEFAULT_API_VERSION,
        timeout=timeout,
    )
    logger.info(f"Loaded client config from {path}")
    return config
