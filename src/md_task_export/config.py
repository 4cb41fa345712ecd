"""Configuration management for Markdown Task Export."""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Dict, Any
import yaml

from .models import FormatOptions
from .exceptions import InvalidOptionError


logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_FILENAME = "outstanding_tasks.csv"

DELIMITER_NAMES = {
    "comma": ",",
    ",": ",",
    "semicolon": ";",
    ";": ";",
}

FLAG_KEYS = ("compress_levels", "include_header", "verbose")
TEXT_KEYS = ("input_path", "output_path", "delimiter")


def parse_delimiter(value: str) -> str:
    """Resolve a delimiter name (``comma``/``semicolon``) or literal to its character."""
    key = str(value).strip().lower()
    if key not in DELIMITER_NAMES:
        raise InvalidOptionError(
            f"Invalid delimiter: {value}. Use 'comma' or 'semicolon'."
        )
    return DELIMITER_NAMES[key]


def resolve_output_path(output: Optional[str]) -> Path:
    """Resolve the output argument to a CSV file path.

    An existing directory, or a path that does not end in ``.csv``, is treated
    as a directory and gets the default file name appended.
    """
    if not output:
        return Path(DEFAULT_OUTPUT_FILENAME)

    path = Path(output)
    if path.is_dir() or path.suffix.lower() != ".csv":
        return path / DEFAULT_OUTPUT_FILENAME
    return path


@dataclass
class ExportConfig:
    """Run configuration for an export."""

    input_path: Optional[str] = None
    output_path: str = DEFAULT_OUTPUT_FILENAME
    delimiter: str = "comma"  # comma, semicolon, "," or ";"
    compress_levels: bool = False
    include_header: bool = True
    verbose: bool = False

    def to_format_options(self) -> FormatOptions:
        """Build serializer options, validating the delimiter."""
        return FormatOptions(
            delimiter=parse_delimiter(self.delimiter),
            compress_levels=self.compress_levels,
            include_header=self.include_header,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        return yaml.dump(self.to_dict(), default_flow_style=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExportConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidOptionError(f"Unknown configuration key(s): {', '.join(unknown)}")

        for key, value in data.items():
            if key in FLAG_KEYS and not isinstance(value, bool):
                raise InvalidOptionError(f"{key} must be true or false, got {value!r}")
            if key in TEXT_KEYS and not isinstance(value, str):
                if key == "input_path" and value is None:
                    continue
                raise InvalidOptionError(f"{key} must be a string, got {value!r}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ExportConfig":
        """Deserialize config from YAML."""
        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise InvalidOptionError(f"Invalid configuration file: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise InvalidOptionError("Configuration file must contain a mapping")
        return cls.from_dict(data)

    def merge(self, **overrides: Any) -> "ExportConfig":
        """Return a copy with every non-None override applied."""
        data = self.to_dict()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return ExportConfig.from_dict(data)


def load_config(config_path: Optional[Path] = None) -> ExportConfig:
    """Load configuration from a YAML file, or return defaults."""
    if config_path is None:
        return ExportConfig()

    config_path = Path(config_path)
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            yaml_content = f.read()
    except OSError as e:
        raise InvalidOptionError(f"Failed to load config from {config_path}: {e}") from e

    config = ExportConfig.from_yaml(yaml_content)
    logger.debug(f"Loaded configuration from {config_path}")
    return config


def save_config(config: ExportConfig, config_path: Path) -> None:
    """Save configuration to a YAML file."""
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, 'w', encoding='utf-8') as f:
        f.write(config.to_yaml())
    logger.debug(f"Configuration saved to {config_path}")
