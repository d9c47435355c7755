"""Tests for the zoom level catalog."""

import logging

import pytest

from timeline_zoom.data.zoom_catalog import ZoomLevelCatalog
from timeline_zoom.data.zoom_level import ZoomLevel
from timeline_zoom.utils.error_handler import ConfigurationError, InvalidLevelReference

from tests.conftest import CONTINUOUS_LEVELS, SCENARIO_LEVELS


def _level(index, level_id, base, max_factor=2.0, step=0.5):
    return ZoomLevel(index, level_id, level_id, base, max_factor, step)


class TestCatalogQueries:
    """Tests for lookup and neighbor queries."""

    def test_count_and_order(self, scenario_catalog):
        assert scenario_catalog.count() == 4
        assert len(scenario_catalog) == 4
        assert scenario_catalog.level_ids() == ['WeekDay', 'MonthWeek', 'QuarterMonth', 'YearQuarter']

    def test_by_index(self, scenario_catalog):
        level = scenario_catalog.by_index(2)
        assert level.level_id == 'QuarterMonth'
        assert level.base_pixels_per_unit == 12.0
        assert level.unit_span == 30

    def test_by_index_out_of_range(self, scenario_catalog):
        with pytest.raises(IndexError):
            scenario_catalog.by_index(4)
        with pytest.raises(IndexError):
            scenario_catalog.by_index(-1)

    def test_neighbors(self, scenario_catalog):
        assert scenario_catalog.finer_neighbor(1).level_id == 'WeekDay'
        assert scenario_catalog.coarser_neighbor(1).level_id == 'QuarterMonth'

    def test_neighbors_at_extremes(self, scenario_catalog):
        assert scenario_catalog.finer_neighbor(0) is None
        assert scenario_catalog.coarser_neighbor(3) is None

    def test_index_of(self, scenario_catalog):
        assert scenario_catalog.index_of('YearQuarter') == 3
        assert scenario_catalog.contains('MonthWeek')
        assert not scenario_catalog.contains('Decade')

    def test_index_of_unknown_id(self, scenario_catalog):
        with pytest.raises(InvalidLevelReference) as exc_info:
            scenario_catalog.index_of('Decade')
        assert exc_info.value.level_id == 'Decade'
        assert 'WeekDay' in exc_info.value.known_ids

    def test_unhashable_id_is_unknown(self, scenario_catalog):
        with pytest.raises(InvalidLevelReference):
            scenario_catalog.index_of(['WeekDay'])
        assert not scenario_catalog.contains(['WeekDay'])

    def test_extremes(self, scenario_catalog):
        assert scenario_catalog.finest().level_id == 'WeekDay'
        assert scenario_catalog.coarsest().level_id == 'YearQuarter'
        assert scenario_catalog.is_finest(0)
        assert scenario_catalog.is_coarsest(3)
        assert not scenario_catalog.is_coarsest(2)

    def test_to_dicts_round_trips_through_from_dicts(self, scenario_catalog):
        rebuilt = ZoomLevelCatalog.from_dicts(scenario_catalog.to_dicts())
        assert list(rebuilt) == list(scenario_catalog)

    def test_level_precision(self, scenario_catalog):
        assert scenario_catalog.by_index(0).precision == 1
        assert _level(0, 'A', 10, max_factor=2.25, step=0.5).precision == 2
        assert _level(0, 'A', 10, max_factor=3, step=1).precision == 0


class TestCatalogValidation:
    """Tests for catalog invariants enforced at load time."""

    def test_max_factor_below_one_rejected(self):
        records = [dict(r) for r in SCENARIO_LEVELS]
        records[1]['max_factor'] = 0.5
        with pytest.raises(ConfigurationError) as exc_info:
            ZoomLevelCatalog.from_dicts(records)
        assert any('max_factor' in problem for problem in exc_info.value.problems)

    def test_single_level_rejected(self):
        with pytest.raises(ConfigurationError):
            ZoomLevelCatalog([_level(0, 'Only', 10)])

    def test_empty_catalog_rejected(self):
        with pytest.raises(ConfigurationError):
            ZoomLevelCatalog([])

    def test_non_monotonic_rejected(self):
        levels = [_level(0, 'A', 10), _level(1, 'B', 20)]
        with pytest.raises(ConfigurationError) as exc_info:
            ZoomLevelCatalog(levels)
        assert 'strictly coarser' in exc_info.value.details

    def test_equal_density_rejected(self):
        with pytest.raises(ConfigurationError):
            ZoomLevelCatalog([_level(0, 'A', 10), _level(1, 'B', 10)])

    def test_non_contiguous_indices_rejected(self):
        with pytest.raises(ConfigurationError):
            ZoomLevelCatalog([_level(0, 'A', 20), _level(2, 'B', 10)])

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ConfigurationError):
            ZoomLevelCatalog([_level(0, 'A', 20), _level(1, 'A', 10)])

    def test_non_positive_step_rejected(self):
        with pytest.raises(ConfigurationError):
            ZoomLevelCatalog([_level(0, 'A', 20, step=0), _level(1, 'B', 10)])

    def test_missing_key_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ZoomLevelCatalog.from_dicts([
                {'id': 'A', 'base_pixels_per_unit': 20, 'max_factor': 2.0},
                {'id': 'B', 'base_pixels_per_unit': 10, 'max_factor': 2.0, 'step': 0.5},
            ])
        assert 'step' in exc_info.value.message

    def test_non_numeric_value_rejected(self):
        with pytest.raises(ConfigurationError):
            ZoomLevelCatalog.from_dicts([
                {'id': 'A', 'base_pixels_per_unit': 'wide', 'max_factor': 2.0, 'step': 0.5},
                {'id': 'B', 'base_pixels_per_unit': 10, 'max_factor': 2.0, 'step': 0.5},
            ])

    def test_all_problems_reported(self):
        levels = [_level(0, 'A', 10, max_factor=0.5), _level(1, 'B', 20, step=-1)]
        with pytest.raises(ConfigurationError) as exc_info:
            ZoomLevelCatalog(levels)
        assert len(exc_info.value.problems) == 3

    def test_overlapping_tiers_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger='timeline_zoom.data.zoom_catalog'):
            ZoomLevelCatalog.from_dicts(SCENARIO_LEVELS)
        assert "'MonthWeek' and 'WeekDay' overlap" in caplog.text

    def test_continuous_tiers_not_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger='timeline_zoom.data.zoom_catalog'):
            ZoomLevelCatalog.from_dicts(CONTINUOUS_LEVELS)
        assert 'overlap' not in caplog.text
