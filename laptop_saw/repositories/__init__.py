# Catalog and criteria store package

from .base import (
    CriteriaRepository,
    LaptopRepository,
    RecordNotFoundError,
    RepositoryError,
)
from .memory import InMemoryCriteriaRepository, InMemoryLaptopRepository
from .json_file import JsonFileCriteriaRepository, JsonFileLaptopRepository
from .factory import build_repositories, create_repositories, seed_repositories

__all__ = [
    "CriteriaRepository",
    "LaptopRepository",
    "RecordNotFoundError",
    "RepositoryError",
    "InMemoryCriteriaRepository",
    "InMemoryLaptopRepository",
    "JsonFileCriteriaRepository",
    "JsonFileLaptopRepository",
    "build_repositories",
    "create_repositories",
    "seed_repositories",
]
