"""
Unit conversion utilities for height measurements.
Height is always stored in centimeters in the database.
Conversions are applied on input/output based on the unit the client sends or asks for.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

CM_PER_FOOT = 30.48

MIN_HEIGHT_CM = 100
MAX_HEIGHT_CM = 250

# Centimeter bounds divided by CM_PER_FOOT, rounded to 2 decimals
MIN_HEIGHT_FEET = 3.28
MAX_HEIGHT_FEET = 8.20

HEIGHT_REQUIRED_MESSAGE = "Height value and unit are required"
HEIGHT_UNSUPPORTED_UNIT_MESSAGE = "Unsupported height unit"


class HeightUnit(Enum):
    CENTIMETERS = 'CENTIMETERS'
    FEET = 'FEET'

    @property
    def display_name(self) -> str:
        return HEIGHT_UNIT_DISPLAY_NAMES[self]

    @classmethod
    def from_label(cls, label: str) -> Optional['HeightUnit']:
        """Resolve a member name or display label (case-insensitive). Unknown labels give None."""
        if label is None:
            return None
        return _HEIGHT_UNIT_LABELS.get(str(label).strip().lower())


HEIGHT_UNIT_DISPLAY_NAMES = {
    HeightUnit.CENTIMETERS: 'cm',
    HeightUnit.FEET: 'feet',
}

_HEIGHT_UNIT_LABELS = {
    'centimeters': HeightUnit.CENTIMETERS,
    'cm': HeightUnit.CENTIMETERS,
    'feet': HeightUnit.FEET,
    'ft': HeightUnit.FEET,
}


@dataclass(frozen=True)
class HeightMeasurement:
    value: float
    unit: HeightUnit

    def to_dict(self):
        return {'value': self.value, 'unit': self.unit.display_name}


def to_centimeters(value: float, unit: HeightUnit) -> Optional[float]:
    if value is None or unit is None:
        return None

    if unit is HeightUnit.CENTIMETERS:
        return value
    if unit is HeightUnit.FEET:
        return value * CM_PER_FOOT
    return None


def from_centimeters(cm_value: float, target_unit: HeightUnit) -> Optional[HeightMeasurement]:
    if cm_value is None:
        return None

    if target_unit is HeightUnit.CENTIMETERS:
        return HeightMeasurement(cm_value, HeightUnit.CENTIMETERS)
    if target_unit is HeightUnit.FEET:
        return HeightMeasurement(cm_value / CM_PER_FOOT, HeightUnit.FEET)
    return None


def is_height_valid(value: float, unit: HeightUnit) -> bool:
    if value is None or unit is None:
        return False

    if unit is HeightUnit.CENTIMETERS:
        return MIN_HEIGHT_CM <= value <= MAX_HEIGHT_CM
    if unit is HeightUnit.FEET:
        return MIN_HEIGHT_FEET <= value <= MAX_HEIGHT_FEET
    return False


def height_validation_error(value: float, unit: HeightUnit) -> Optional[str]:
    """
    Return a user-facing message describing why a height is rejected, or None if it is accepted.
    Never raises; the caller decides whether to reject the request.
    """
    if value is None or unit is None:
        return HEIGHT_REQUIRED_MESSAGE

    if unit is HeightUnit.CENTIMETERS:
        if not is_height_valid(value, unit):
            return f"Height must be between {MIN_HEIGHT_CM} and {MAX_HEIGHT_CM} cm"
        return None
    if unit is HeightUnit.FEET:
        if not is_height_valid(value, unit):
            return f"Height must be between {MIN_HEIGHT_FEET:.2f} and {MAX_HEIGHT_FEET:.2f} feet"
        return None
    return HEIGHT_UNSUPPORTED_UNIT_MESSAGE
