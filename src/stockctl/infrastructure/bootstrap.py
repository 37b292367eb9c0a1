"""Builds the JSON storage and the inventory service.

The data directory comes from the caller when given, otherwise from
settings. The CLI command modules call in here for a loaded service.
"""

from __future__ import annotations

from pathlib import Path

from stockctl.application.inventory_service import InventoryService
from stockctl.infrastructure.config import get_settings
from stockctl.infrastructure.persistence.json_inventory_storage import (
    JsonInventoryStorage,
)


def inventory_storage(data_dir: Path | None = None) -> JsonInventoryStorage:
    if data_dir is None:
        data_dir = get_settings().DATA_DIR
    return JsonInventoryStorage.in_directory(data_dir)


def inventory_service(data_dir: Path | None = None) -> InventoryService:
    """Build the service, loading current state from disk."""
    return InventoryService(inventory_storage(data_dir))
