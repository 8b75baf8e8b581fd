"""JSON-file backed catalog and criteria stores.

Both stores can share one data file: a JSON object with a ``laptops`` and a
``criteria`` array. Each store rewrites only its own section.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List

from .base import RepositoryError
from .memory import InMemoryCriteriaRepository, InMemoryLaptopRepository
from ..models.core import Criterion, Laptop
from ..utils.logging import get_logger


logger = get_logger(__name__)


def _read_document(data_path: Path) -> Dict[str, Any]:
    if not data_path.exists():
        return {}
    try:
        with open(data_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to read data file {data_path}: {e}")
        raise RepositoryError(f"Failed to read data file {data_path}: {e}") from e

    if not isinstance(data, dict):
        raise RepositoryError(f"Data file {data_path} must contain a JSON object")
    return data


def _write_section(data_path: Path, section: str, records: List[Dict[str, Any]]) -> None:
    document = _read_document(data_path)
    document[section] = records

    data_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = data_path.with_name(data_path.name + ".tmp")
    try:
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(document, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, data_path)
    except OSError as e:
        logger.error(f"Failed to write data file {data_path}: {e}")
        raise RepositoryError(f"Failed to write data file {data_path}: {e}") from e


class JsonFileLaptopRepository(InMemoryLaptopRepository):
    """Laptop catalog persisted to the ``laptops`` section of a JSON file."""

    def __init__(self, data_file: str):
        self.data_path = Path(data_file)
        records = _read_document(self.data_path).get("laptops", [])
        try:
            laptops = [Laptop.from_dict(record) for record in records]
        except (KeyError, TypeError, ValueError) as e:
            raise RepositoryError(f"Invalid laptop record in {self.data_path}: {e}") from e

        super().__init__(laptops)
        logger.info(f"Loaded {len(laptops)} laptops from {self.data_path}")

    async def _after_write(self) -> None:
        records = [laptop.to_dict() for laptop in await self.list_all()]
        _write_section(self.data_path, "laptops", records)


class JsonFileCriteriaRepository(InMemoryCriteriaRepository):
    """Criteria persisted to the ``criteria`` section of a JSON file."""

    def __init__(self, data_file: str):
        self.data_path = Path(data_file)
        records = _read_document(self.data_path).get("criteria", [])
        try:
            criteria = [Criterion.from_dict(record) for record in records]
        except (KeyError, TypeError, ValueError) as e:
            raise RepositoryError(f"Invalid criterion record in {self.data_path}: {e}") from e

        super().__init__(criteria)
        logger.info(f"Loaded {len(criteria)} criteria from {self.data_path}")

    async def _after_write(self) -> None:
        records = [criterion.to_dict() for criterion in await self.list_all()]
        _write_section(self.data_path, "criteria", records)
