"""Converter options and their YAML loader.

Options can be given programmatically or read from a YAML file:

    enable_correlation: true
    script_prefix: "Script_"
    write_dat_files: true
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from jmx2lr.exceptions import ConfigException


@dataclass
class ConverterOptions:
    """Options controlling which features are applied during conversion.

    Attributes:
        enable_correlation: Emit web_reg_save_param_* for extractors (default: True)
        script_prefix: Prefix of every script folder name (default: "Script_")
        write_dat_files: Write a .dat copy next to every CSV file (default: True)
    """

    enable_correlation: bool = True
    script_prefix: str = "Script_"
    write_dat_files: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "enable_correlation": self.enable_correlation,
            "script_prefix": self.script_prefix,
            "write_dat_files": self.write_dat_files,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "options") -> "ConverterOptions":
        """Build options from a dictionary, validating keys and types.

        Args:
            data: Option values keyed by field name
            source: Name used in error messages

        Returns:
            ConverterOptions instance

        Raises:
            ConfigException: Unknown key or wrong value type
        """
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigException(f"Unknown option(s) in {source}: {', '.join(unknown)}")

        values: dict[str, Any] = {}
        for key, value in data.items():
            expected = bool if isinstance(getattr(cls, key), bool) else str
            if not isinstance(value, expected):
                raise ConfigException(
                    f"Invalid value for '{key}' in {source}: "
                    f"expected {expected.__name__}, got {type(value).__name__}"
                )
            values[key] = value

        return cls(**values)


def load_options(config_path: str) -> ConverterOptions:
    """Load converter options from a YAML file.

    Args:
        config_path: Path to YAML options file

    Returns:
        ConverterOptions with file values over defaults

    Raises:
        FileNotFoundError: Options file doesn't exist
        ConfigException: YAML parsing fails or options are invalid
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Options file not found: {config_path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigException(f"Invalid YAML syntax in {config_path}: {e}")

    if data is None:
        return ConverterOptions()

    if not isinstance(data, dict):
        raise ConfigException(
            f"Invalid options format in {config_path}: expected dictionary"
        )

    return ConverterOptions.from_dict(data, source=config_path)
