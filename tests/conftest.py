"""Shared fixtures for laptop-saw tests."""

from datetime import datetime, timedelta

import pytest
import pytest_asyncio

from laptop_saw.config.settings import config_manager, get_seed_config
from laptop_saw.models.core import Criterion, CriterionType, Laptop
from laptop_saw.repositories.factory import seed_repositories
from laptop_saw.repositories.memory import InMemoryCriteriaRepository, InMemoryLaptopRepository
from laptop_saw.services.decision_support import DecisionSupportService
from laptop_saw.utils.error_handling import ErrorHandler
from laptop_saw.utils.logging import setup_logging


@pytest.fixture(autouse=True)
def restore_global_config():
    """Undo changes tests make to the global configuration manager."""
    saved = (config_manager.config_dir, config_manager.environment, config_manager.config_file)
    yield
    config_manager.config_dir, config_manager.environment, config_manager.config_file = saved
    config_manager.reload()
    setup_logging()


def make_laptop(laptop_id: str, **overrides) -> Laptop:
    values = {
        "name": f"Laptop {laptop_id}",
        "brand": "Generic",
        "price": 10000000,
        "ram": 8,
        "processor_score": 7000,
        "storage": 512,
        "screen_size": 14.0,
    }
    values.update(overrides)
    return Laptop(id=laptop_id, **values)


@pytest.fixture
def sample_laptops():
    base = datetime(2024, 1, 1, 12, 0, 0)
    return [
        make_laptop("l1", name="ThinkPad E14", brand="Lenovo", price=12500000, ram=16,
                    processor_score=8200, storage=512, screen_size=14.0, created_at=base),
        make_laptop("l2", name="Vivobook 15", brand="ASUS", price=7800000, ram=8,
                    processor_score=6100, storage=512, screen_size=15.6,
                    created_at=base + timedelta(minutes=1)),
        make_laptop("l3", name="Aspire 5", brand="Acer", price=9200000, ram=16,
                    processor_score=7400, storage=1024, screen_size=15.6,
                    created_at=base + timedelta(minutes=2)),
    ]


@pytest.fixture
def sample_criteria():
    return [
        Criterion(id="c-price", name="Harga", weight=0.30, type=CriterionType.COST, attribute="price"),
        Criterion(id="c-ram", name="RAM", weight=0.20, type=CriterionType.BENEFIT, attribute="ram"),
        Criterion(id="c-cpu", name="Processor", weight=0.25, type=CriterionType.BENEFIT,
                  attribute="processor_score"),
        Criterion(id="c-storage", name="Storage", weight=0.15, type=CriterionType.BENEFIT, attribute="storage"),
        Criterion(id="c-screen", name="Ukuran Layar", weight=0.10, type=CriterionType.BENEFIT,
                  attribute="screen_size"),
    ]


@pytest.fixture
def laptop_repository(sample_laptops):
    return InMemoryLaptopRepository(sample_laptops)


@pytest.fixture
def criteria_repository(sample_criteria):
    return InMemoryCriteriaRepository(sample_criteria)


@pytest.fixture
def error_handler():
    return ErrorHandler()


@pytest.fixture
def service(laptop_repository, criteria_repository, error_handler):
    return DecisionSupportService(laptop_repository, criteria_repository, error_handler=error_handler)


@pytest_asyncio.fixture
async def seeded_service(error_handler):
    """Service over in-memory stores filled with the packaged seed data."""
    laptop_repository, criteria_repository = InMemoryLaptopRepository(), InMemoryCriteriaRepository()
    await seed_repositories(laptop_repository, criteria_repository, get_seed_config())
    return DecisionSupportService(laptop_repository, criteria_repository, error_handler=error_handler)
