"""Zoom tier configuration and value records."""

from .catalog_config import CatalogConfig
from .zoom_catalog import ZoomLevelCatalog
from .zoom_level import (
    BOUNDARY_GLOBAL_MAXIMUM,
    BOUNDARY_GLOBAL_MINIMUM,
    FACTOR_TOLERANCE,
    MIN_FACTOR,
    AlignmentAnchor,
    ZoomLevel,
    ZoomResult,
    ZoomState,
)

__all__ = [
    'AlignmentAnchor',
    'BOUNDARY_GLOBAL_MAXIMUM',
    'BOUNDARY_GLOBAL_MINIMUM',
    'CatalogConfig',
    'FACTOR_TOLERANCE',
    'MIN_FACTOR',
    'ZoomLevel',
    'ZoomLevelCatalog',
    'ZoomResult',
    'ZoomState',
]
