"""
Zoom Catalog Configuration for the timeline view.
Provides the built-in zoom tiers and loads overrides from a JSON config file.
"""

import copy
import json
import logging
import os

from timeline_zoom.data.zoom_catalog import ZoomLevelCatalog
from timeline_zoom.data.zoom_level import MIN_FACTOR, ZoomState
from timeline_zoom.utils.error_handler import ConfigurationError, InvalidLevelReference

logger = logging.getLogger(__name__)

# Section of a shared configuration file holding the zoom settings
CONFIG_SECTION = 'timeline_zoom'


class CatalogConfig:
    """
    Manages the static zoom tier configuration.

    The built-in tiers are used unless a configuration file provides a
    'timeline_zoom' section, in which case its values replace the defaults.
    """

    DEFAULT_CONFIG = {
        'zoom_levels': [
            {
                'id': 'WeekDay',
                'name': 'Week / Day',
                'base_pixels_per_unit': 60.0,
                'max_factor': 2.5,
                'step': 0.5,
                'unit_span': 1,
                'description': 'Daily planning with weekly context',
            },
            {
                'id': 'MonthWeek',
                'name': 'Month / Week',
                'base_pixels_per_unit': 30.0,
                'max_factor': 3.0,
                'step': 0.5,
                'unit_span': 7,
                'description': 'Monthly overview with weekly breakdown',
            },
            {
                'id': 'QuarterMonth',
                'name': 'Quarter / Month',
                'base_pixels_per_unit': 12.0,
                'max_factor': 3.5,
                'step': 0.5,
                'unit_span': 30,
                'description': 'Quarterly overview with monthly breakdown',
            },
            {
                'id': 'YearQuarter',
                'name': 'Year / Quarter',
                'base_pixels_per_unit': 3.0,
                'max_factor': 4.0,
                'step': 0.5,
                'unit_span': 90,
                'description': 'Annual overview with quarterly breakdown',
            },
        ],
        'initial_level': 'WeekDay',
        'initial_factor': MIN_FACTOR,
    }

    def __init__(self, config_file=None):
        """
        Initialize the zoom catalog configuration.

        Args:
            config_file: Path to a JSON configuration file (optional)

        Raises:
            ConfigurationError: If the configuration file cannot be read
        """
        self.config_file = config_file
        # Deep copy so callers never mutate the class defaults
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file and os.path.exists(config_file):
            self.load()

    def load(self):
        """
        Load zoom settings from the configuration file.

        Raises:
            ConfigurationError: If the file is unreadable or not valid JSON
        """
        if not self.config_file or not os.path.exists(self.config_file):
            return

        # Empty files carry no overrides
        if os.path.getsize(self.config_file) == 0:
            return

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Zoom configuration is not valid JSON: {e}", source=str(self.config_file)
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Zoom configuration could not be read: {e}", source=str(self.config_file)
            ) from e

        if not isinstance(data, dict) or CONFIG_SECTION not in data:
            logger.debug(f"No '{CONFIG_SECTION}' section in {self.config_file}, using defaults")
            return

        section = data[CONFIG_SECTION]
        if not isinstance(section, dict):
            raise ConfigurationError(
                f"'{CONFIG_SECTION}' section must be an object", source=str(self.config_file)
            )

        for key in ('zoom_levels', 'initial_level', 'initial_factor'):
            if key in section:
                self.config[key] = section[key]

        logger.info(f"Loaded zoom configuration from {self.config_file}")

    def get_level_records(self):
        """
        Get the configured tier records.

        Returns:
            list: Copies of the tier dicts, finest first
        """
        return copy.deepcopy(self.config['zoom_levels'])

    def build_catalog(self):
        """
        Build the zoom catalog from the current configuration.

        Returns:
            ZoomLevelCatalog: The validated catalog

        Raises:
            ConfigurationError: If the configured tiers are invalid
        """
        records = self.config['zoom_levels']
        if not isinstance(records, list):
            raise ConfigurationError(
                "'zoom_levels' must be a list of tier objects",
                source=str(self.config_file) if self.config_file else None,
            )
        return ZoomLevelCatalog.from_dicts(
            records,
            source=str(self.config_file) if self.config_file else 'built-in defaults',
        )

    def initial_state(self, catalog):
        """
        Build the initial zoom state for a new timeline view.

        Args:
            catalog: The catalog the state belongs to

        Returns:
            ZoomState: Configured initial tier at the configured factor (clamped)

        Raises:
            ConfigurationError: If the initial level is not in the catalog
        """
        level_id = self.config.get('initial_level')
        if level_id is None:
            index = 0
        else:
            try:
                index = catalog.index_of(level_id)
            except InvalidLevelReference as e:
                raise ConfigurationError(
                    f"Initial zoom level {level_id!r} is not in the catalog",
                    problems=[e.details],
                    source=str(self.config_file) if self.config_file else None,
                ) from e

        try:
            factor = float(self.config.get('initial_factor', MIN_FACTOR))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Initial zoom factor is not a number: {e}") from e

        return ZoomState(index, catalog.by_index(index).clamp_factor(factor))

    def reset_to_defaults(self):
        """Reset all zoom settings to the built-in defaults."""
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
