"""
vrf_sizing - VRF condensing unit sizing

Sizes VRF condensing units from a set of indoor evaporators, a brand, an
installation orientation and a simultaneity (diversity) factor.

Author: VRF Sizing Project
Date: 2026-10-17
"""

__version__ = "0.1.0"

from vrf_sizing.core.catalog import Brand, Catalog, EvaporatorType, Orientation, ProductFamily
from vrf_sizing.core.catalog_service import CatalogService, get_catalog_service

__all__ = [
    "Brand",
    "Catalog",
    "EvaporatorType",
    "Orientation",
    "ProductFamily",
    "CatalogService",
    "get_catalog_service",
]
