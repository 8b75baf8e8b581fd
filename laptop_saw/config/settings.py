"""Configuration management for laptop-saw using OmegaConf."""

import os
from pathlib import Path
from typing import Any, Dict, Optional
from omegaconf import DictConfig, OmegaConf


PACKAGE_CONFIG_DIR = Path(__file__).parent


class ConfigManager:
    """Configuration manager using OmegaConf for YAML-based configuration."""

    def __init__(self, config_dir: Optional[str] = None, environment: Optional[str] = None,
                 config_file: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_dir: Directory containing environment and user configuration files
            environment: Environment name (development, production, etc.)
            config_file: Explicit configuration file merged over the defaults
        """
        self.config_dir = Path(config_dir or os.getenv("LAPTOP_SAW_CONFIG_DIR", PACKAGE_CONFIG_DIR))
        self.environment = environment or os.getenv("ENVIRONMENT", "default")
        self.config_file = Path(config_file) if config_file else None
        self._config: Optional[DictConfig] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML files."""
        # Packaged defaults are always the base layer
        default_config_path = PACKAGE_CONFIG_DIR / "default.yaml"
        if not default_config_path.exists():
            raise FileNotFoundError(f"Default configuration file not found: {default_config_path}")

        config = OmegaConf.load(default_config_path)

        if self.config_file is not None:
            if not self.config_file.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
            config = OmegaConf.merge(config, OmegaConf.load(self.config_file))
        else:
            # Load environment-specific configuration if it exists
            env_config_path = self.config_dir / f"{self.environment}.yaml"
            if env_config_path.exists():
                config = OmegaConf.merge(config, OmegaConf.load(env_config_path))

            # Load user-specific configuration if it exists
            user_config_path = self.config_dir / "user.yaml"
            if user_config_path.exists():
                config = OmegaConf.merge(config, OmegaConf.load(user_config_path))

        # Override with environment variables
        config = self._apply_env_overrides(config)

        self._config = config

    def _apply_env_overrides(self, config: DictConfig) -> DictConfig:
        """Apply environment variable overrides to configuration."""
        env_mappings = {
            "LAPTOP_SAW_API_HOST": "api.host",
            "LAPTOP_SAW_API_PORT": "api.port",
            "LAPTOP_SAW_API_DEBUG": "api.debug",
            "LAPTOP_SAW_LOG_LEVEL": "logging.level",
            "LAPTOP_SAW_STORAGE_BACKEND": "storage.backend",
            "LAPTOP_SAW_STORAGE_DATA_FILE": "storage.data_file",
            "LAPTOP_SAW_SCORING_STRICT": "scoring.strict",
            "LAPTOP_SAW_SCORING_PRECISION": "scoring.precision",
            "LAPTOP_SAW_WEIGHT_TOLERANCE": "scoring.weight_tolerance",
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                # Convert string values to appropriate types
                if env_value.lower() in ("true", "false"):
                    env_value = env_value.lower() == "true"
                elif env_value.isdigit():
                    env_value = int(env_value)
                elif env_value.replace(".", "", 1).isdigit():
                    env_value = float(env_value)

                OmegaConf.update(config, config_path, env_value)

        return config

    @property
    def config(self) -> DictConfig:
        """Get the current configuration."""
        if self._config is None:
            self._load_config()
        return self._config

    def reload(self) -> None:
        """Reload configuration from files."""
        self._load_config()

    def configure(self, config_dir: Optional[str] = None, environment: Optional[str] = None,
                  config_file: Optional[str] = None) -> None:
        """Point the manager at another directory, environment or file and reload."""
        if config_dir is not None:
            self.config_dir = Path(config_dir)
        if environment is not None:
            self.environment = environment
        if config_file is not None:
            self.config_file = Path(config_file)
        self._load_config()

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation key.

        Args:
            key: Configuration key in dot notation (e.g., 'api.host')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return OmegaConf.select(self.config, key, default=default)


# Global configuration manager instance
config_manager = ConfigManager()
config = config_manager.config


def _section(name: str) -> Dict[str, Any]:
    return OmegaConf.to_container(config_manager.config[name], resolve=True)


def get_api_config() -> Dict[str, Any]:
    """Get API configuration parameters."""
    return _section("api")


def get_storage_config() -> Dict[str, Any]:
    """Get storage backend configuration parameters."""
    return _section("storage")


def get_scoring_config() -> Dict[str, Any]:
    """Get SAW scoring configuration parameters."""
    return _section("scoring")


def get_logging_config() -> Dict[str, Any]:
    """Get logging configuration parameters."""
    return _section("logging")


def get_seed_config() -> Dict[str, Any]:
    """Get the default criteria and sample laptops used to seed empty stores."""
    return _section("seed")
