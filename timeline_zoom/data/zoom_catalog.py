"""
Zoom Level Catalog - Ordered, immutable set of zoom tiers.

Tiers are ordered from finest (index 0, most pixels per calendar unit) to
coarsest. The catalog is validated once when it is built; an invalid
configuration raises ConfigurationError before any zoom state can exist.
"""

import logging
import math
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from timeline_zoom.data.zoom_level import MIN_FACTOR, ZoomLevel
from timeline_zoom.utils.error_handler import ConfigurationError, InvalidLevelReference

logger = logging.getLogger(__name__)

# A catalog needs at least one finer and one coarser tier
MIN_LEVEL_COUNT = 2


class ZoomLevelCatalog:
    """
    Immutable ordered list of zoom tiers with neighbor and lookup queries.

    Increasing index means a strictly coarser tier, i.e. a strictly smaller
    base pixel density. All queries are deterministic and side-effect free.
    """

    def __init__(self, levels: Iterable[ZoomLevel], source: Optional[str] = None):
        """
        Build and validate a catalog.

        Args:
            levels: Tier records ordered finest to coarsest
            source: Origin of the configuration, used in error details

        Raises:
            ConfigurationError: If any catalog invariant is violated
        """
        self._levels: Tuple[ZoomLevel, ...] = tuple(levels)
        self._source = source
        self._validate()
        self._index_by_id = {level.level_id: level.index for level in self._levels}
        self._warn_on_overlap()

        logger.debug(
            f"Loaded zoom catalog with {len(self._levels)} levels: "
            f"{', '.join(self.level_ids())}"
        )

    @classmethod
    def from_dicts(cls, records: Iterable[Dict[str, Any]],
                   source: Optional[str] = None) -> 'ZoomLevelCatalog':
        """
        Build a catalog from configuration records.

        Args:
            records: Tier dicts ordered finest to coarsest (see ZoomLevel.from_dict)
            source: Origin of the records, used in error details

        Returns:
            ZoomLevelCatalog: The validated catalog

        Raises:
            ConfigurationError: If a record is malformed or the catalog is invalid
        """
        levels = []
        for index, record in enumerate(records):
            try:
                levels.append(ZoomLevel.from_dict(index, record))
            except KeyError as e:
                raise ConfigurationError(
                    f"Zoom level {index} is missing required key {e}",
                    source=source,
                ) from e
            except (TypeError, ValueError) as e:
                raise ConfigurationError(
                    f"Zoom level {index} has an invalid value: {e}",
                    source=source,
                ) from e
        return cls(levels, source=source)

    def _validate(self):
        """Check every catalog invariant and raise with all violations found."""
        problems = []

        if len(self._levels) < MIN_LEVEL_COUNT:
            problems.append(
                f"catalog needs at least {MIN_LEVEL_COUNT} levels, got {len(self._levels)}"
            )

        seen_ids = set()
        for position, level in enumerate(self._levels):
            label = f"level {position} ({level.level_id!r})"

            if level.index != position:
                problems.append(f"{label} has index {level.index}, expected {position}")
            if level.level_id in seen_ids:
                problems.append(f"{label} duplicates an earlier level id")
            seen_ids.add(level.level_id)

            if not math.isfinite(level.base_pixels_per_unit) or level.base_pixels_per_unit <= 0:
                problems.append(
                    f"{label} base_pixels_per_unit must be positive, got {level.base_pixels_per_unit}"
                )
            if not math.isfinite(level.max_factor) or level.max_factor < MIN_FACTOR:
                problems.append(
                    f"{label} max_factor must be >= {MIN_FACTOR}, got {level.max_factor}"
                )
            if not math.isfinite(level.step) or level.step <= 0:
                problems.append(f"{label} step must be positive, got {level.step}")
            if level.unit_span < 1:
                problems.append(f"{label} unit_span must be >= 1, got {level.unit_span}")

        for finer, coarser in zip(self._levels, self._levels[1:]):
            if not coarser.base_pixels_per_unit < finer.base_pixels_per_unit:
                problems.append(
                    f"levels must get strictly coarser: {coarser.level_id!r} "
                    f"({coarser.base_pixels_per_unit} px) follows {finer.level_id!r} "
                    f"({finer.base_pixels_per_unit} px)"
                )

        if problems:
            raise ConfigurationError(
                "Invalid zoom level catalog", problems=problems, source=self._source
            )

    def _warn_on_overlap(self):
        """Log tier pairs where entering the finer tier would reduce magnification."""
        for finer, coarser in zip(self._levels, self._levels[1:]):
            finest_of_coarser = coarser.magnification(coarser.max_factor)
            entry_of_finer = finer.magnification(MIN_FACTOR)
            if entry_of_finer < finest_of_coarser:
                logger.warning(
                    f"Zoom levels {coarser.level_id!r} and {finer.level_id!r} overlap: "
                    f"{coarser.level_id} reaches {finest_of_coarser:g} px/unit but "
                    f"{finer.level_id} starts at {entry_of_finer:g} px/unit"
                )

    def count(self) -> int:
        return len(self._levels)

    def __len__(self):
        return len(self._levels)

    def __iter__(self) -> Iterator[ZoomLevel]:
        return iter(self._levels)

    def by_index(self, index: int) -> ZoomLevel:
        """
        Get the tier at an index.

        Raises:
            IndexError: If index is outside [0, count())
        """
        if not 0 <= index < len(self._levels):
            raise IndexError(
                f"Zoom level index must be between 0 and {len(self._levels) - 1}, got {index}"
            )
        return self._levels[index]

    def finer_neighbor(self, index: int) -> Optional[ZoomLevel]:
        """Tier one step finer than index, or None at the finest tier."""
        self.by_index(index)
        return self._levels[index - 1] if index > 0 else None

    def coarser_neighbor(self, index: int) -> Optional[ZoomLevel]:
        """Tier one step coarser than index, or None at the coarsest tier."""
        self.by_index(index)
        return self._levels[index + 1] if index < len(self._levels) - 1 else None

    def index_of(self, level_id: str) -> int:
        """
        Look up a tier index by id.

        Raises:
            InvalidLevelReference: If level_id is not in the catalog
        """
        try:
            return self._index_by_id[level_id]
        except (KeyError, TypeError):
            raise InvalidLevelReference(level_id, self.level_ids()) from None

    def contains(self, level_id: str) -> bool:
        try:
            return level_id in self._index_by_id
        except TypeError:
            return False

    def finest(self) -> ZoomLevel:
        return self._levels[0]

    def coarsest(self) -> ZoomLevel:
        return self._levels[-1]

    def is_finest(self, index: int) -> bool:
        return index == 0

    def is_coarsest(self, index: int) -> bool:
        return index == len(self._levels) - 1

    def level_ids(self) -> List[str]:
        return [level.level_id for level in self._levels]

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [level.to_dict() for level in self._levels]

    def __repr__(self):
        return f"ZoomLevelCatalog(levels={self.level_ids()})"
