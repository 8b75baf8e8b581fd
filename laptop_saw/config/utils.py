"""Configuration utilities for laptop-saw."""

import json
from pathlib import Path
from typing import Any, Optional
from omegaconf import DictConfig, OmegaConf
from .settings import PACKAGE_CONFIG_DIR, config_manager


VALID_STORAGE_BACKENDS = ["memory", "json_file"]
VALID_CRITERION_TYPES = ["benefit", "cost"]


def validate_config(cfg: Optional[DictConfig] = None) -> bool:
    """
    Validate a configuration for required fields and valid values.

    Args:
        cfg: Configuration to validate (defaults to the global configuration)

    Returns:
        True if configuration is valid, False otherwise
    """
    cfg = cfg if cfg is not None else config_manager.config
    try:
        # Check required API configuration
        assert cfg.api.host, "API host must be specified"
        assert isinstance(cfg.api.port, int) and cfg.api.port > 0, "API port must be a positive integer"

        # Check storage configuration
        assert cfg.storage.backend in VALID_STORAGE_BACKENDS, \
            f"Storage backend must be one of {VALID_STORAGE_BACKENDS}"
        if cfg.storage.backend == "json_file":
            assert cfg.storage.data_file, "JSON file backend requires storage.data_file"

        # Check scoring configuration
        assert isinstance(cfg.scoring.precision, int) and 0 <= cfg.scoring.precision <= 12, \
            "Scoring precision must be an integer between 0 and 12"
        assert 0 <= cfg.scoring.weight_tolerance < 1, "Weight tolerance must be between 0 and 1"

        # Check seed criteria
        for criterion in cfg.seed.criteria:
            assert criterion.type in VALID_CRITERION_TYPES, \
                f"Seed criterion '{criterion.name}' has invalid type '{criterion.type}'"
            assert 0 <= criterion.weight <= 1, f"Seed criterion '{criterion.name}' weight must be in [0, 1]"
        total = sum(criterion.weight for criterion in cfg.seed.criteria)
        if cfg.seed.criteria:
            assert abs(total - 1.0) <= cfg.scoring.weight_tolerance, \
                f"Seed criteria weights must sum to 1.0 (got {total:.4f})"

        return True
    except (AssertionError, AttributeError) as e:
        print(f"Configuration validation failed: {e}")
        return False


def get_environment() -> str:
    """Get the current environment name."""
    return config_manager.environment


def set_environment(environment: str) -> None:
    """
    Set the environment and reload configuration.

    Args:
        environment: Environment name (development, production, etc.)
    """
    config_manager.environment = environment
    config_manager.reload()


def get_user_config_path() -> Path:
    """
    Get the path to the user configuration file.

    Returns:
        Path to user.yaml in the active configuration directory
    """
    return config_manager.config_dir / "user.yaml"


def create_user_config_from_template() -> Optional[Path]:
    """Create user.yaml from the packaged template if it doesn't exist.

    Returns:
        Path of the created file, or None if it already existed
    """
    user_config_path = get_user_config_path()
    template_path = PACKAGE_CONFIG_DIR / "user.yaml.template"

    if user_config_path.exists():
        print(f"User configuration already exists: {user_config_path}")
        return None

    user_config_path.parent.mkdir(parents=True, exist_ok=True)
    user_config_path.write_text(template_path.read_text(encoding='utf-8'), encoding='utf-8')
    print(f"Created user configuration file: {user_config_path}")
    return user_config_path


def print_config_summary() -> None:
    """Print a summary of the current configuration."""
    cfg = config_manager.config
    print("=== Laptop SAW Configuration Summary ===")
    print(f"Environment: {get_environment()}")
    print(f"API: {cfg.api.host}:{cfg.api.port} (debug: {cfg.api.debug})")
    print(f"Storage: {cfg.storage.backend} ({cfg.storage.data_file})")
    print(f"Scoring: strict={cfg.scoring.strict}, precision={cfg.scoring.precision}")
    print(f"Weight tolerance: {cfg.scoring.weight_tolerance}")
    print(f"Seed criteria: {len(cfg.seed.criteria)}")
    print(f"Log Level: {cfg.logging.level}")
    print("=" * 40)


def export_config_to_file(output_path: str, format: str = "yaml") -> None:
    """
    Export current configuration to a file.

    Args:
        output_path: Path to output file
        format: Output format ('yaml' or 'json')
    """
    output_path = Path(output_path)

    if format.lower() == "yaml":
        OmegaConf.save(config_manager.config, output_path)
    elif format.lower() == "json":
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(OmegaConf.to_container(config_manager.config, resolve=True), f, indent=2)
    else:
        raise ValueError(f"Unsupported format: {format}")

    print(f"Configuration exported to: {output_path}")


def get_config_value(key_path: str, default: Any = None) -> Any:
    """
    Get a configuration value using dot notation.

    Args:
        key_path: Configuration key path (e.g., 'api.host')
        default: Default value if key not found

    Returns:
        Configuration value
    """
    return config_manager.get(key_path, default)
