"""
CatalogService - Loads the catalog and diversity factor tables

All reference data reaches the sizing modules through this service. Each source
is fetched once; a failed fetch is logged and replaced by built-in data so the
application keeps working on safe defaults.

Author: VRF Sizing Project
Date: 2026-10-17
"""

import json
import logging
import math
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from vrf_sizing.core.catalog import Catalog, DiversityFactor, ProductFamily

DATA_DIR = Path(__file__).parent / "data"
BUILTIN_CATALOG_FILE = DATA_DIR / "catalog.json"
BUILTIN_FACTORS_FILE = DATA_DIR / "factors.json"

# Used when no diversity table can be loaded at all
BUILTIN_FACTORS: Dict[ProductFamily, Tuple[DiversityFactor, ...]] = {
    ProductFamily.MULTI_SPLIT: (
        DiversityFactor("Corporate", 1.10),
        DiversityFactor("Residential", 1.40),
    ),
    ProductFamily.VRF: (
        DiversityFactor("Corporate", 110),
        DiversityFactor("Residential", 145),
    ),
}

FACTORS_UNAVAILABLE = "Diversity factors could not be loaded; built-in defaults are in use."
CATALOG_UNAVAILABLE = "The product catalog could not be loaded; the built-in catalog is in use."

logger = logging.getLogger(__name__)


def _read_json(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def builtin_catalog() -> Catalog:
    """Catalog shipped with the package."""
    return Catalog.from_dict(_read_json(BUILTIN_CATALOG_FILE))


class JsonDataSource:
    """
    Reads catalog and factor tables from JSON files.

    Paths left as None point at the packaged data.
    """

    def __init__(self, catalog_path: Optional[str] = None, factors_path: Optional[str] = None):
        self.catalog_path = Path(catalog_path) if catalog_path else BUILTIN_CATALOG_FILE
        self.factors_path = Path(factors_path) if factors_path else BUILTIN_FACTORS_FILE

    def fetch_catalog(self) -> dict:
        return _read_json(self.catalog_path)

    def fetch_factors(self, family: ProductFamily) -> List[dict]:
        return _read_json(self.factors_path)[family.value]


def parse_factor_rows(rows, family: ProductFamily) -> List[DiversityFactor]:
    """
    Convert raw {name, value} rows into diversity factors.

    Rows without a name or with a non-finite value are skipped, as are VRF rows
    whose value is not positive. VRF tables are ordered by value, then name;
    multi-split tables by name.
    """
    factors = []
    for row in rows:
        try:
            name = str(row["name"]).strip()
            value = float(row["value"])
        except (KeyError, TypeError, ValueError):
            logger.warning(f"Skipping malformed {family.value} diversity row: {row!r}")
            continue

        if not name or not math.isfinite(value):
            logger.warning(f"Skipping invalid {family.value} diversity row: {row!r}")
            continue
        if family is ProductFamily.VRF and value <= 0:
            logger.warning(f"Skipping non-positive VRF diversity value: {row!r}")
            continue
        factors.append(DiversityFactor(name, value))

    if family is ProductFamily.VRF:
        return sorted(factors, key=lambda f: (f.multiplier, f.name))
    return sorted(factors, key=lambda f: f.name)


class CatalogService:
    """
    Holds the active catalog and diversity tables.

    Serves built-in defaults until load() (or load_in_background()) completes.
    Fetches are never retried: one failure degrades the source to defaults and
    records a warning.
    """

    def __init__(self, source=None):
        """
        Args:
            source: Object with fetch_catalog() and fetch_factors(family);
                packaged JSON data when None
        """
        self.source = source if source is not None else JsonDataSource()
        self.catalog: Catalog = builtin_catalog()
        self._factors: Dict[ProductFamily, Tuple[DiversityFactor, ...]] = dict(BUILTIN_FACTORS)
        self.catalog_available = True
        self.factors_available: Dict[ProductFamily, bool] = {family: True for family in ProductFamily}
        self.loaded = False
        self.warnings: List[str] = []
        self._lock = threading.Lock()

    @property
    def data_unavailable(self) -> bool:
        return not self.catalog_available or not all(self.factors_available.values())

    def factors(self, family: ProductFamily) -> Tuple[DiversityFactor, ...]:
        """Diversity factor table of a product family."""
        return self._factors[family]

    # ========== Loading ==========

    def load(self) -> List[str]:
        """
        Fetch the catalog and every diversity table.

        Returns:
            Warnings for the sources that fell back to defaults
        """
        self._load_catalog()
        self._load_factors()
        self.loaded = True
        return list(self.warnings)

    def load_in_background(self, callback: Optional[Callable[[List[str]], None]] = None) -> threading.Thread:
        """
        Run the catalog and factor loads on daemon threads.

        Args:
            callback: Called with the warning list once both loads finish.
                Runs on a worker thread; GUI callers must marshal it.

        Returns:
            The waiter thread (join it to block until loading completes)
        """
        workers = [
            threading.Thread(target=self._load_catalog, daemon=True),
            threading.Thread(target=self._load_factors, daemon=True),
        ]

        def wait_all():
            for worker in workers:
                worker.join()
            self.loaded = True
            if callback is not None:
                callback(list(self.warnings))

        for worker in workers:
            worker.start()
        waiter = threading.Thread(target=wait_all, daemon=True)
        waiter.start()
        return waiter

    def _warn(self, message: str) -> None:
        with self._lock:
            if message not in self.warnings:
                self.warnings.append(message)

    def _load_catalog(self) -> None:
        try:
            catalog = Catalog.from_dict(self.source.fetch_catalog())
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Catalog fetch failed, keeping built-in catalog | Error: {e}")
            self.catalog_available = False
            self._warn(CATALOG_UNAVAILABLE)
            return
        self.catalog = catalog
        self.catalog_available = True
        logger.info(f"Catalog loaded: brands={[b.value for b in catalog.brands()]}")

    def _fetch_factors(self, family: ProductFamily, parse_as: Optional[ProductFamily] = None) -> List[DiversityFactor]:
        """Fetch one family table, validated by the rules of parse_as; empty list on failure."""
        try:
            return parse_factor_rows(self.source.fetch_factors(family), parse_as or family)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Diversity fetch failed for {family.value} | Error: {e}")
            return []

    def _load_factors(self) -> None:
        for family in ProductFamily:
            factors = self._fetch_factors(family)

            if not factors and family is ProductFamily.VRF:
                # Legacy deployments only have the multi-split table
                factors = self._fetch_factors(ProductFamily.MULTI_SPLIT, parse_as=ProductFamily.VRF)
                if factors:
                    logger.warning("VRF diversity table unavailable, using the multi-split table")

            if factors:
                self._factors[family] = tuple(factors)
                self.factors_available[family] = True
            else:
                self._factors[family] = BUILTIN_FACTORS[family]
                self.factors_available[family] = False
                self._warn(FACTORS_UNAVAILABLE)
                logger.warning(f"Using built-in {family.value} diversity factors")


_service: Optional[CatalogService] = None


def get_catalog_service() -> CatalogService:
    """
    Get the global CatalogService instance, configured from settings.

    Returns:
        CatalogService instance
    """
    global _service
    if _service is None:
        from vrf_sizing.core.settings import get_settings

        settings = get_settings()
        _service = CatalogService(JsonDataSource(
            catalog_path=settings.get("catalog_path"),
            factors_path=settings.get("factors_path"),
        ))
    return _service
