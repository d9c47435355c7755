"""
Zoom data records.

Immutable value types shared by the catalog, the engine and the alignment
calculator: per-tier configuration, the current zoom snapshot, command
results and scroll anchors.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional

# Minimum zoom factor for every tier (base magnification)
MIN_FACTOR = 1.0

# Tolerance used for all factor comparisons
FACTOR_TOLERANCE = 1e-6

# Boundary markers reported by zoom commands
BOUNDARY_GLOBAL_MINIMUM = "global_minimum"
BOUNDARY_GLOBAL_MAXIMUM = "global_maximum"


def decimal_places(value: float) -> int:
    """
    Count the decimal places of a configured number.

    Args:
        value: A finite configured value such as a step (0.5) or max (2.5)

    Returns:
        int: Number of digits after the decimal point, 0 for integral values
    """
    exponent = Decimal(str(value)).normalize().as_tuple().exponent
    return max(0, -exponent)


@dataclass(frozen=True)
class ZoomLevel:
    """
    Configuration for one zoom tier.

    Attributes:
        index: Ordinal position in the catalog (0 = finest tier)
        level_id: Stable identifier used by set_level (e.g. 'WeekDay')
        name: Display name, treated as opaque text
        base_pixels_per_unit: Pixels for one base calendar unit at factor 1.0
        max_factor: Largest continuous factor allowed within this tier
        step: Continuous increment used by zoom_in / zoom_out
        unit_span: Base units covered by one header cell of this tier
        description: Optional description, treated as opaque text
    """
    index: int
    level_id: str
    name: str
    base_pixels_per_unit: float
    max_factor: float
    step: float
    unit_span: int = 1
    description: str = ""

    @property
    def precision(self) -> int:
        """Decimal places committed factors are rounded to in this tier."""
        return max(decimal_places(self.step), decimal_places(self.max_factor))

    def clamp_factor(self, factor: float, precision: Optional[int] = None) -> float:
        """
        Clamp a factor into [MIN_FACTOR, max_factor] and round it.

        Args:
            factor: Requested factor
            precision: Decimal places to keep (default: the tier's precision)

        Returns:
            float: A factor satisfying the tier's range invariant
        """
        if precision is None:
            precision = self.precision
        clamped = max(MIN_FACTOR, min(self.max_factor, factor))
        rounded = round(clamped, precision)
        # Rounding may step just outside the range when max_factor has more
        # digits than the rounding target
        return max(MIN_FACTOR, min(self.max_factor, rounded))

    def is_valid_factor(self, factor: float) -> bool:
        return MIN_FACTOR - FACTOR_TOLERANCE <= factor <= self.max_factor + FACTOR_TOLERANCE

    def magnification(self, factor: float) -> float:
        """Effective pixels per base unit at the given factor."""
        return self.base_pixels_per_unit * factor

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.level_id,
            'name': self.name,
            'base_pixels_per_unit': self.base_pixels_per_unit,
            'max_factor': self.max_factor,
            'step': self.step,
            'unit_span': self.unit_span,
            'description': self.description,
        }

    @classmethod
    def from_dict(cls, index: int, record: Dict[str, Any]) -> 'ZoomLevel':
        """
        Build a ZoomLevel from a configuration record.

        Args:
            index: Position of the record in the configured tier list
            record: Dict with 'id', 'base_pixels_per_unit', 'max_factor', 'step'
                and optional 'name', 'unit_span', 'description'

        Returns:
            ZoomLevel: The tier record (not yet validated against the catalog)

        Raises:
            KeyError: If a required key is missing
            TypeError, ValueError: If a numeric field cannot be converted
        """
        level_id = str(record['id'])
        return cls(
            index=index,
            level_id=level_id,
            name=str(record.get('name', level_id)),
            base_pixels_per_unit=float(record['base_pixels_per_unit']),
            max_factor=float(record['max_factor']),
            step=float(record['step']),
            unit_span=int(record.get('unit_span', 1)),
            description=str(record.get('description', '')),
        )


@dataclass(frozen=True)
class ZoomState:
    """
    Current tier and continuous factor of one timeline view.

    Instances are immutable; the engine replaces its state on every commit so
    a snapshot handed to a listener never changes afterwards.
    """
    level_index: int
    factor: float = MIN_FACTOR

    def to_dict(self) -> Dict[str, Any]:
        return {'level_index': self.level_index, 'factor': self.factor}


@dataclass(frozen=True)
class ZoomResult:
    """
    Outcome of a zoom command.

    Attributes:
        state: The state after the command (unchanged on a no-op)
        changed: Whether the command committed a new state
        boundary: BOUNDARY_GLOBAL_MINIMUM / BOUNDARY_GLOBAL_MAXIMUM when a
            zoom_out / zoom_in was refused at a global extreme
        error: The handled exception when a recoverable error occurred
    """
    state: ZoomState
    changed: bool
    boundary: Optional[str] = None
    error: Optional[Exception] = field(default=None, compare=False)

    @property
    def boundary_reached(self) -> bool:
        return self.boundary is not None


@dataclass(frozen=True)
class AlignmentAnchor:
    """
    Calendar unit whose screen position is preserved across a transition.

    Attributes:
        unit: Calendar ordinal of the anchored unit
        pixel_offset: Offset of the unit's left edge from the viewport's left
            edge, in pixels (negative when the unit is partially scrolled out)
    """
    unit: int
    pixel_offset: float
