import marshmallow as ma
from healthapp.utils.timestamps import to_naive_utc

WEIGHT_RANGE_ERROR = "Weight must be between 30 and 300 kg"
NOTE_LENGTH_ERROR = "Note cannot exceed 200 characters"


class WeightCreateSchema(ma.Schema):
    user_id = ma.fields.Int(
        required=True,
        validate=ma.validate.Range(min=1, error="User ID must be positive")
    )
    logged_at = ma.fields.DateTime(required=True)
    weight = ma.fields.Float(
        required=True,
        validate=ma.validate.Range(min=30, max=300, error=WEIGHT_RANGE_ERROR)
    )
    note = ma.fields.Str(
        required=False,
        allow_none=True,
        validate=ma.validate.Length(max=200, error=NOTE_LENGTH_ERROR)
    )

    @ma.post_load
    def normalize_logged_at(self, data, **kwargs):
        # Timestamps are stored as naive UTC
        if 'logged_at' in data:
            data['logged_at'] = to_naive_utc(data['logged_at'])
        return data


class WeightUpdateSchema(ma.Schema):
    logged_at = ma.fields.DateTime(required=False)
    weight = ma.fields.Float(
        required=False,
        validate=ma.validate.Range(min=30, max=300, error=WEIGHT_RANGE_ERROR)
    )
    note = ma.fields.Str(
        required=False,
        validate=ma.validate.Length(max=200, error=NOTE_LENGTH_ERROR)
    )

    @ma.post_load
    def normalize_logged_at(self, data, **kwargs):
        if 'logged_at' in data:
            data['logged_at'] = to_naive_utc(data['logged_at'])
        return data
