"""Shared fixtures for the timeline zoom tests."""

import pytest

from timeline_zoom.data.zoom_catalog import ZoomLevelCatalog


SCENARIO_LEVELS = [
    {'id': 'WeekDay', 'base_pixels_per_unit': 60, 'max_factor': 2.5, 'step': 0.5},
    {'id': 'MonthWeek', 'base_pixels_per_unit': 30, 'max_factor': 3.0, 'step': 0.5, 'unit_span': 7},
    {'id': 'QuarterMonth', 'base_pixels_per_unit': 12, 'max_factor': 3.5, 'step': 0.5, 'unit_span': 30},
    {'id': 'YearQuarter', 'base_pixels_per_unit': 3, 'max_factor': 4.0, 'step': 0.5, 'unit_span': 90},
]

# Each finer tier starts above the coarser tier's largest magnification
CONTINUOUS_LEVELS = [
    {'id': 'Fine', 'base_pixels_per_unit': 40, 'max_factor': 2.0, 'step': 0.5},
    {'id': 'Mid', 'base_pixels_per_unit': 8, 'max_factor': 4.0, 'step': 0.5},
    {'id': 'Coarse', 'base_pixels_per_unit': 2, 'max_factor': 3.0, 'step': 0.5},
]


@pytest.fixture
def scenario_catalog():
    """Four-tier WeekDay..YearQuarter catalog."""
    return ZoomLevelCatalog.from_dicts(SCENARIO_LEVELS, source='test scenario')


@pytest.fixture
def continuous_catalog():
    """Catalog whose tiers never overlap in magnification."""
    return ZoomLevelCatalog.from_dicts(CONTINUOUS_LEVELS, source='test continuous')


# Tier ranges that are not a whole number of steps above 1.0
OFF_GRID_LEVELS = [
    {'id': 'Fine', 'base_pixels_per_unit': 40, 'max_factor': 2.25, 'step': 0.5},
    {'id': 'Coarse', 'base_pixels_per_unit': 10, 'max_factor': 2.2, 'step': 0.5},
]


@pytest.fixture
def off_grid_catalog():
    """Catalog whose max factors fall between step increments."""
    return ZoomLevelCatalog.from_dicts(OFF_GRID_LEVELS, source='test off-grid')
