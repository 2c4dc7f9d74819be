"""Configuration document for contributor aggregation."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Set

import yaml

from shared.logger import get_logger

logger = get_logger(__name__)

KNOWN_KEYS = (
    "exclusions",
    "keepExcludedUsers",
    "extractEmailDomain",
    "fieldsWhitelist",
    "excludeRepositories",
)


@dataclass
class ContributorConfig:
    """Options read from the `config` section of the YAML document."""

    exclusions: Set[str] = field(default_factory=set)
    keep_excluded_users: bool = False
    extract_email_domain: bool = False
    fields_whitelist: Set[str] = field(default_factory=set)
    exclude_repositories: Set[str] = field(default_factory=set)

    @classmethod
    def from_dict(cls, section: Optional[Dict[str, Any]]) -> "ContributorConfig":
        """
        Build a config from the `config` section of a document.

        Args:
            section: Parsed section (None means all defaults)

        Returns:
            ContributorConfig

        Raises:
            ValueError: If the section is not a mapping or an option has the wrong type
        """
        if section is None:
            return cls()

        if not isinstance(section, dict):
            raise ValueError(f"'config' must be a mapping, got {type(section).__name__}")

        for key in section:
            if key not in KNOWN_KEYS:
                logger.debug(f"Ignoring unknown config key: {key}")

        return cls(
            exclusions=_names(section, "exclusions"),
            keep_excluded_users=_flag(section, "keepExcludedUsers"),
            extract_email_domain=_flag(section, "extractEmailDomain"),
            fields_whitelist=_names(section, "fieldsWhitelist"),
            exclude_repositories=_names(section, "excludeRepositories"),
        )


def _names(section: Dict[str, Any], key: str) -> Set[str]:
    value = section.get(key)
    if value is None:
        return set()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"'{key}' must be a list of strings, got {value!r}")
    return set(value)


def _flag(section: Dict[str, Any], key: str) -> bool:
    value = section.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"'{key}' must be true or false, got {value!r}")
    return value


def load_config(filepath: Optional[Path] = None) -> ContributorConfig:
    """
    Load the configuration document.

    Args:
        filepath: Path to the YAML file (defaults only if None or empty)

    Returns:
        ContributorConfig

    Raises:
        FileNotFoundError: If the path is given but does not exist
        ValueError: If the file cannot be read or parsed
    """
    if not filepath:
        return ContributorConfig()

    filepath = Path(filepath)
    if not filepath.is_file():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    logger.info(f"Loading config from {filepath}")

    try:
        with open(filepath, "r") as f:
            document = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ValueError(f"Failed to load config {filepath}: {e}")

    if document is None:
        return ContributorConfig()

    if not isinstance(document, dict):
        raise ValueError(f"Config {filepath} must be a mapping with a 'config' section")

    return ContributorConfig.from_dict(document.get("config"))
