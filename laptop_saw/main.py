"""Main application entry point for laptop-saw."""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Any, List, Optional

from .config.settings import config_manager, get_api_config, get_scoring_config
from .config.utils import validate_config
from .models.core import RankedLaptop
from .repositories.factory import build_repositories
from .services.decision_support import DecisionSupportService
from .services.saw import SAWError, SAWScoringEngine, validate_weights
from .utils.logging import setup_logging


class LaptopSAWApplication:
    """Command-line application around the SAW decision support service."""

    def __init__(self, config_path: Optional[str] = None, environment: Optional[str] = None):
        """
        Initialize the application.

        Args:
            config_path: Path to a configuration file or directory
            environment: Environment name (development, production, etc.)
        """
        self.config_path = config_path
        self.environment = environment

        config_dir = None
        config_file = None
        if config_path:
            config_path_obj = Path(config_path)
            if config_path_obj.is_dir():
                config_dir = str(config_path_obj)
            elif config_path_obj.is_file():
                config_file = str(config_path_obj)
            else:
                raise FileNotFoundError(f"Configuration path not found: {config_path}")

        config_manager.configure(config_dir=config_dir, environment=environment, config_file=config_file)
        self.config = config_manager.config

        # Logging follows the reloaded configuration
        self.logger = setup_logging()

    def validate_configuration(self) -> bool:
        """
        Validate the loaded configuration.

        Returns:
            True if configuration is valid, False otherwise
        """
        if not validate_config(self.config):
            self.logger.error("Configuration validation failed")
            return False
        self.logger.info("Configuration validation successful")
        return True

    def log_configuration_info(self) -> None:
        """Log important configuration information."""
        self.logger.info(f"Environment: {self.environment or config_manager.environment}")
        self.logger.info(f"Storage backend: {self.config.storage.backend}")
        self.logger.info(f"Strict scoring: {self.config.scoring.strict}")
        self.logger.info(f"Score precision: {self.config.scoring.precision}")

    def _engine(self) -> SAWScoringEngine:
        scoring_config = get_scoring_config()
        return SAWScoringEngine(
            strict=scoring_config.get("strict", False),
            precision=scoring_config.get("precision", 4)
        )

    async def rank_store_async(self) -> List[RankedLaptop]:
        """Rank the laptops held by the configured store."""
        laptop_repository, criteria_repository = await build_repositories()
        service = DecisionSupportService(laptop_repository, criteria_repository, engine=self._engine())

        weighting = await service.validate_weights({})
        if not weighting.is_valid:
            self.logger.warning(f"Criteria weights sum to {weighting.total:.4f}, not 1.0")

        return await service.compute_ranking()

    def rank_file(self, input_path: str) -> List[RankedLaptop]:
        """Rank the laptops and criteria stored in a JSON file.

        The file holds an object with ``laptops`` and ``criteria`` arrays.
        """
        with open(input_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, dict) or "laptops" not in data or "criteria" not in data:
            raise ValueError("Input file must contain an object with 'laptops' and 'criteria' arrays")

        weighting = validate_weights(data["criteria"], get_scoring_config().get("weight_tolerance", 0.001))
        if not weighting.is_valid:
            self.logger.warning(f"Criteria weights sum to {weighting.total:.4f}, not 1.0")

        return self._engine().score(data["laptops"], data["criteria"])

    def serve(self) -> int:
        """Run the HTTP API with uvicorn."""
        import uvicorn
        from .api.app import create_app

        api_config = get_api_config()
        self.logger.info(f"Starting API on {api_config['host']}:{api_config['port']}")
        uvicorn.run(create_app(), host=api_config["host"], port=api_config["port"])
        return 0

    def run(self, rank: bool = False, input_path: Optional[str] = None, serve: bool = False) -> int:
        """
        Run the requested action.

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        if not self.validate_configuration():
            return 1
        self.log_configuration_info()

        if serve:
            return self.serve()

        try:
            if input_path:
                ranking = self.rank_file(input_path)
            else:
                ranking = asyncio.run(self.rank_store_async())
        except SAWError as e:
            self.logger.error(f"Ranking failed: {e}")
            return 1
        except (OSError, ValueError) as e:
            self.logger.error(f"Cannot read input: {e}")
            return 1

        if rank or input_path:
            print(format_ranking_table(ranking))
        return 0


def _record_field(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name, "")
    return getattr(record, name, "")


def format_ranking_table(ranking: List[RankedLaptop]) -> str:
    """Render a ranking as a plain-text table."""
    if not ranking:
        return "No laptops to rank."

    rows = [("Rank", "Score", "Brand", "Name")]
    for ranked in ranking:
        rows.append((
            str(ranked.rank),
            f"{ranked.score:.4f}",
            str(_record_field(ranked.laptop, "brand")),
            str(_record_field(ranked.laptop, "name")),
        ))

    widths = [max(len(row[column]) for row in rows) for column in range(4)]
    lines = ["  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip() for row in rows]
    lines.insert(1, "  ".join("-" * width for width in widths))
    return "\n".join(lines)


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="laptop-saw",
        description="Laptop decision support with Simple Additive Weighting (SAW)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --rank                             # Rank the configured store
  %(prog)s --input laptops.json               # Rank laptops and criteria from a JSON file
  %(prog)s --serve                            # Run the HTTP API
  %(prog)s --config custom/ --env production  # Custom config directory and environment
        """
    )

    # Configuration options
    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Path to configuration file or directory"
    )

    parser.add_argument(
        "--environment", "--env", "-e",
        type=str,
        help="Environment name (development, production, etc.)"
    )

    # Actions
    parser.add_argument(
        "--rank",
        action="store_true",
        help="Print the SAW ranking of the configured store"
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        help="Rank a JSON file with 'laptops' and 'criteria' arrays instead of the store"
    )

    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the HTTP API"
    )

    parser.add_argument(
        "--validate-config",
        action="store_true",
        help="Validate the configuration and exit"
    )

    # Logging options
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (overrides configuration)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging (equivalent to --log-level DEBUG)"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-error output (equivalent to --log-level ERROR)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main application entry point with CLI argument parsing.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    # Handle logging level overrides
    if args.verbose:
        os.environ["LAPTOP_SAW_LOG_LEVEL"] = "DEBUG"
    elif args.quiet:
        os.environ["LAPTOP_SAW_LOG_LEVEL"] = "ERROR"
    elif args.log_level:
        os.environ["LAPTOP_SAW_LOG_LEVEL"] = args.log_level

    try:
        app = LaptopSAWApplication(
            config_path=args.config,
            environment=args.environment
        )

        if args.validate_config:
            return 0 if app.validate_configuration() else 1

        return app.run(rank=args.rank, input_path=args.input, serve=args.serve)

    except KeyboardInterrupt:
        print("\nApplication interrupted by user")
        return 130
    except Exception as e:
        print(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
