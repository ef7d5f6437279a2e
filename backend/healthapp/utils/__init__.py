"""Utility functions and helpers for the health app."""

from .unit_conversion import (
    CM_PER_FOOT,
    HeightUnit,
    HeightMeasurement,
    to_centimeters,
    from_centimeters,
    is_height_valid,
    height_validation_error
)
from .pagination import (
    normalize_pagination,
    paginate_query,
    paginated_response
)

__all__ = [
    'CM_PER_FOOT',
    'HeightUnit',
    'HeightMeasurement',
    'to_centimeters',
    'from_centimeters',
    'is_height_valid',
    'height_validation_error',
    'normalize_pagination',
    'paginate_query',
    'paginated_response'
]
