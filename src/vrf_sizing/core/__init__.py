"""Core reference data and services for VRF condenser sizing"""

from vrf_sizing.core.catalog import (
    Brand,
    Catalog,
    CondenserEntry,
    DiversityFactor,
    EvaporatorType,
    Orientation,
    ProductFamily,
)
from vrf_sizing.core.catalog_service import CatalogService, get_catalog_service

__all__ = [
    "Brand",
    "Catalog",
    "CondenserEntry",
    "DiversityFactor",
    "EvaporatorType",
    "Orientation",
    "ProductFamily",
    "CatalogService",
    "get_catalog_service",
]
