"""Build the configured catalog and criteria stores and seed empty ones."""

from typing import Any, Callable, Dict, Optional, Tuple

from .base import CriteriaRepository, LaptopRepository
from .json_file import JsonFileCriteriaRepository, JsonFileLaptopRepository
from .memory import InMemoryCriteriaRepository, InMemoryLaptopRepository
from ..config.settings import get_seed_config, get_storage_config
from ..utils.logging import get_logger


logger = get_logger(__name__)

RepositoryPair = Tuple[LaptopRepository, CriteriaRepository]


def _memory_backend(storage_config: Dict[str, Any]) -> RepositoryPair:
    return InMemoryLaptopRepository(), InMemoryCriteriaRepository()


def _json_file_backend(storage_config: Dict[str, Any]) -> RepositoryPair:
    data_file = storage_config.get("data_file")
    if not data_file:
        raise ValueError("data_file is required for the json_file storage backend")
    return JsonFileLaptopRepository(data_file), JsonFileCriteriaRepository(data_file)


BACKENDS: Dict[str, Callable[[Dict[str, Any]], RepositoryPair]] = {
    "memory": _memory_backend,
    "json_file": _json_file_backend,
}


def create_repositories(storage_config: Optional[Dict[str, Any]] = None) -> RepositoryPair:
    """Instantiate the laptop and criteria stores for a storage configuration.

    Args:
        storage_config: ``storage`` configuration section (defaults to the global one)

    Returns:
        Tuple of (laptop repository, criteria repository)

    Raises:
        ValueError: If the backend is unknown or misconfigured
    """
    storage_config = storage_config if storage_config is not None else get_storage_config()
    backend = storage_config.get("backend", "memory")

    if backend not in BACKENDS:
        available = ', '.join(BACKENDS)
        raise ValueError(f"Unknown storage backend '{backend}'. Available: {available}")

    logger.info(f"Creating '{backend}' storage backend")
    return BACKENDS[backend](storage_config)


async def seed_repositories(laptop_repository: LaptopRepository,
                            criteria_repository: CriteriaRepository,
                            seed_config: Optional[Dict[str, Any]] = None,
                            include_laptops: bool = True) -> Dict[str, int]:
    """Fill empty stores with the configured default criteria and sample laptops.

    Stores that already hold records are left alone.

    Returns:
        Number of seeded records per collection
    """
    seed_config = seed_config if seed_config is not None else get_seed_config()
    seeded = {"criteria": 0, "laptops": 0}

    if await criteria_repository.count() == 0:
        for criterion in seed_config.get("criteria", []):
            await criteria_repository.insert(criterion)
            seeded["criteria"] += 1

    if include_laptops and await laptop_repository.count() == 0:
        for laptop in seed_config.get("laptops", []):
            await laptop_repository.insert(laptop)
            seeded["laptops"] += 1

    if seeded["criteria"] or seeded["laptops"]:
        logger.info(f"Seeded {seeded['criteria']} criteria and {seeded['laptops']} laptops")
    return seeded


async def build_repositories(storage_config: Optional[Dict[str, Any]] = None,
                             seed_config: Optional[Dict[str, Any]] = None) -> RepositoryPair:
    """Create the configured stores and seed them."""
    storage_config = storage_config if storage_config is not None else get_storage_config()
    laptop_repository, criteria_repository = create_repositories(storage_config)
    await seed_repositories(
        laptop_repository,
        criteria_repository,
        seed_config,
        include_laptops=storage_config.get("seed_sample_laptops", True)
    )
    return laptop_repository, criteria_repository
