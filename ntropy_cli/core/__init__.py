"""Core CLI components - configuration, settings store, and API client."""

from ntropy_cli.core.api_client import APIClient, APIResponse, ErrorKind, NtropyAPIError
from ntropy_cli.core.config import CLIConfig, get_config
from ntropy_cli.core.store import ConfigStore, FileConfigStore, MemoryConfigStore, get_store

__all__ = [
    "CLIConfig",
    "get_config",
    "ConfigStore",
    "FileConfigStore",
    "MemoryConfigStore",
    "get_store",
    "APIClient",
    "APIResponse",
    "ErrorKind",
    "NtropyAPIError",
]
