"""CLI Configuration management."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_BASE_URL = "https://api.ntropy.network"
DEFAULT_API_PREFIX = "/v3"


def _default_config_dir() -> Path:
    return Path.home() / ".ntropy-cli"


@dataclass
class CLIConfig:
    """Runtime configuration for the Ntropy CLI."""

    # API settings
    base_url: str = DEFAULT_BASE_URL
    api_prefix: str = DEFAULT_API_PREFIX
    timeout: float = 30.0
    api_url: str = field(init=False)

    # Local state (settings file, REPL history)
    config_dir: Path = field(default_factory=_default_config_dir)

    # Output settings
    json_output: bool = False
    page_size: int = 20
    log_level: str = "WARNING"

    def __post_init__(self):
        self.config_dir = Path(self.config_dir)
        self.api_url = f"{self.base_url.rstrip('/')}{self.api_prefix}"

    @property
    def history_file(self) -> Path:
        return self.config_dir / "history"

    @classmethod
    def from_env(cls) -> "CLIConfig":
        """Create config from environment variables."""
        home = os.getenv("NTROPY_CLI_HOME")
        return cls(
            base_url=os.getenv("NTROPY_BASE_URL", DEFAULT_BASE_URL),
            api_prefix=os.getenv("NTROPY_API_PREFIX", DEFAULT_API_PREFIX),
            timeout=float(os.getenv("NTROPY_TIMEOUT", "30")),
            config_dir=Path(home).expanduser() if home else _default_config_dir(),
            json_output=os.getenv("NTROPY_JSON", "").lower() in ("1", "true", "yes"),
            log_level=os.getenv("NTROPY_LOG_LEVEL", "WARNING"),
        )


# Global config instance
_config: Optional[CLIConfig] = None


def get_config() -> CLIConfig:
    """Get or create the global CLI configuration."""
    global _config
    if _config is None:
        _config = CLIConfig.from_env()
    return _config


def set_config(config: Optional[CLIConfig]) -> None:
    """Set the global CLI configuration."""
    global _config
    _config = config
