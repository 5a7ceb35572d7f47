"""
Configuration for deepset's default providers and logging.

The configuration picks the structural hash parameters (digest width, salt),
whether numeric types are distinguished, and the log level used by
``setup_logging``. It can be stored in and loaded from a YAML file.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .errors import ConfigurationError
from .providers.hashing import MAX_DIGEST_SIZE, MAX_SALT_SIZE

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class DeepSetConfig:
    """
    Configuration for DeepSet providers.

    Two containers built from different configurations hash values
    differently, so set algebra between them still works (it only calls
    ``has``) but their bucket layouts are not comparable.
    """

    # Structural hash width in bytes (8 = 64-bit hash)
    digest_size: int = 8

    # Optional BLAKE2b salt, at most 16 UTF-8 bytes
    salt: str = ""

    # Keep True, 1 and 1.0 distinct
    strict_numeric: bool = True

    # Level for setup_logging
    log_level: str = "WARNING"

    def __post_init__(self):
        """Validate configuration parameters."""
        if (
            not isinstance(self.digest_size, int)
            or isinstance(self.digest_size, bool)
            or not (1 <= self.digest_size <= MAX_DIGEST_SIZE)
        ):
            raise ConfigurationError(
                f"digest_size must be an integer between 1 and {MAX_DIGEST_SIZE}, got {self.digest_size!r}",
                field_name="digest_size", value=self.digest_size,
            )

        if not isinstance(self.salt, str):
            raise ConfigurationError(
                f"salt must be a string, got {type(self.salt).__name__}",
                field_name="salt", value=self.salt,
            )
        if len(self.salt.encode("utf-8")) > MAX_SALT_SIZE:
            raise ConfigurationError(
                f"salt must encode to at most {MAX_SALT_SIZE} bytes, got {self.salt!r}",
                field_name="salt", value=self.salt,
            )

        if not isinstance(self.log_level, str) or self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigurationError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {self.log_level!r}",
                field_name="log_level", value=self.log_level,
            )
        self.log_level = self.log_level.upper()

    def providers(self) -> Tuple[Any, Any]:
        """Return the (hasher, equals) pair this configuration describes."""
        from .providers import default_providers

        return default_providers(self)

    def to_dict(self) -> Dict[str, Union[int, str, bool]]:
        """Convert to dictionary representation."""
        return {
            "digest_size": self.digest_size,
            "salt": self.salt,
            "strict_numeric": self.strict_numeric,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "DeepSetConfig":
        """Create from dictionary representation."""
        return cls(
            digest_size=data.get("digest_size", 8),
            salt=str(data.get("salt") or ""),
            strict_numeric=bool(data.get("strict_numeric", True)),
            log_level=data.get("log_level", "WARNING"),
        )

    def save_to_file(self, file_path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        file_path = Path(file_path)

        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def load_from_file(cls, file_path: Union[str, Path]) -> "DeepSetConfig":
        """Load configuration from YAML file."""
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(file_path, "r") as f:
            data = yaml.safe_load(f)

        if data is not None and not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {file_path}",
                details={"file_path": str(file_path)},
            )

        return cls.from_dict(data or {})

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        # Look for config in current directory, then home directory
        current_dir_config = Path(".deepset.yml")
        if current_dir_config.exists():
            return current_dir_config

        return Path.home() / ".deepset.yml"

    @classmethod
    def load_or_default(
        cls, config_path: Optional[Union[str, Path]] = None
    ) -> "DeepSetConfig":
        """
        Load configuration from file or return default if not found.

        Args:
            config_path: Optional path to configuration file

        Returns:
            DeepSetConfig instance
        """
        if config_path:
            config_path = Path(config_path)
            if config_path.exists():
                return cls.load_from_file(config_path)
        else:
            # Try default locations
            default_path = cls.get_default_config_path()
            if default_path.exists():
                return cls.load_from_file(default_path)

        # Return default configuration
        return cls()
