"""
Read-only sauce and package catalog.

The menu store exports its catalog as JSON:

    {
        "sauces":   [{"id": "buffalo", "name": "Buffalo", "category": ..., ...}],
        "packages": [{"id": "party-80", "name": "Party Pack", "totalWings": 80}]
    }

The catalog is loaded once at startup and never written back.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from config import Config
from core.exceptions import CatalogLoadError, UnknownPackageError, UnknownSauceError
from logging_config import get_logger
from models.sauce import Sauce
from modules.assignment_validator import validate_sauce


logger = get_logger(__name__)


class CatalogService:
    """
    Sauces and packages available to the planner.

    Args:
        catalog_path: JSON file to load (default: Config.CATALOG_PATH)

    Raises:
        CatalogLoadError: File missing, not JSON, or without a "sauces" list
    """

    def __init__(self, catalog_path: Optional[Union[str, Path]] = None):
        self.catalog_path = Path(catalog_path or Config.CATALOG_PATH)
        self._sauces: Dict[str, Sauce] = {}
        self._packages: Dict[str, Dict[str, Any]] = {}
        self._load()

    def _load(self) -> None:
        if not self.catalog_path.exists():
            raise CatalogLoadError(str(self.catalog_path), "file not found")

        try:
            with open(self.catalog_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogLoadError(str(self.catalog_path), f"invalid JSON: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("sauces"), list):
            raise CatalogLoadError(str(self.catalog_path), 'missing "sauces" list')

        for record in data["sauces"]:
            try:
                sauce = Sauce.from_dict(record)
            except (KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping malformed catalog sauce: {record!r} ({e})")
                continue
            for problem in validate_sauce(sauce):
                logger.warning(f"Catalog sauce {sauce.id}: {problem}")
            self._sauces[sauce.id] = sauce

        for record in data.get("packages") or []:
            package = self._normalize_package(record)
            if package is not None:
                self._packages[package["id"]] = package

        logger.info(
            f"Loaded catalog {self.catalog_path.name}: "
            f"{len(self._sauces)} sauces, {len(self._packages)} packages"
        )

    @staticmethod
    def _normalize_package(record: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            package_id = str(record["id"])
            total_wings = int(record["totalWings"])
        except (KeyError, TypeError, ValueError):
            logger.warning(f"Skipping catalog package without id/totalWings: {record!r}")
            return None
        return {
            "id": package_id,
            "name": record.get("name") or package_id,
            "totalWings": total_wings,
            "servesMin": record.get("servesMin"),
            "servesMax": record.get("servesMax"),
        }

    def sauces(self) -> List[Sauce]:
        return list(self._sauces.values())

    def get_sauce(self, sauce_id: str) -> Sauce:
        try:
            return self._sauces[sauce_id]
        except KeyError:
            raise UnknownSauceError(sauce_id) from None

    def packages(self) -> List[Dict[str, Any]]:
        return [dict(p) for p in self._packages.values()]

    def get_package(self, package_id: str) -> Dict[str, Any]:
        try:
            return dict(self._packages[package_id])
        except KeyError:
            raise UnknownPackageError(package_id) from None
