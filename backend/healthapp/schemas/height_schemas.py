from marshmallow import Schema, fields, ValidationError, validates_schema, post_load
from healthapp.utils.unit_conversion import (
    HeightMeasurement,
    HeightUnit,
    height_validation_error
)


class HeightInputSchema(Schema):
    """
    Height as sent by a client: {"value": 5.9, "unit": "feet"}.
    Loads into a HeightMeasurement; the range check uses the same rules as the converter.
    """
    value = fields.Float(required=False, allow_none=True, allow_nan=False)
    unit = fields.Str(required=False, allow_none=True)

    @staticmethod
    def _resolve_unit(label):
        # Unknown labels are kept as-is so the converter reports them as unsupported
        if label is None:
            return None
        return HeightUnit.from_label(label) or label

    @validates_schema
    def validate_height(self, data, **kwargs):
        message = height_validation_error(data.get('value'), self._resolve_unit(data.get('unit')))
        if message:
            raise ValidationError(message)

    @post_load
    def make_measurement(self, data, **kwargs):
        return HeightMeasurement(data['value'], self._resolve_unit(data['unit']))

