# Configuration package

from .settings import (
    ConfigManager,
    config,
    config_manager,
    get_api_config,
    get_logging_config,
    get_scoring_config,
    get_seed_config,
    get_storage_config,
)

__all__ = [
    "ConfigManager",
    "config",
    "config_manager",
    "get_api_config",
    "get_logging_config",
    "get_scoring_config",
    "get_seed_config",
    "get_storage_config",
]
