from marshmallow import Schema, fields, validate, post_load
from healthapp.models.user import GENDERS, ACTIVITY_LEVELS, USER_ROLES, ACCOUNT_STATUSES
from healthapp.schemas.height_schemas import HeightInputSchema


class UserProfileSchema(Schema):
    """Profile fields shared by the create and patch requests. All optional."""
    first_name = fields.Str(
        required=False,
        validate=validate.Length(max=50, error="First name must be less than 50 characters")
    )

    last_name = fields.Str(
        required=False,
        validate=validate.Length(max=50, error="Last name must be less than 50 characters")
    )

    phone_number = fields.Str(
        required=False,
        validate=validate.Length(max=20, error="Phone number must be less than 20 characters")
    )

    date_of_birth = fields.Date(required=False)

    gender = fields.Str(
        required=False,
        validate=validate.OneOf(GENDERS, error="Gender must be one of: {choices}")
    )

    activity_level = fields.Str(
        required=False,
        validate=validate.OneOf(ACTIVITY_LEVELS, error="Activity level must be one of: {choices}")
    )

    daily_calorie_intake_target = fields.Int(
        required=False,
        validate=validate.Range(min=0, error="Daily calorie intake target cannot be negative")
    )

    daily_calorie_burn_target = fields.Int(
        required=False,
        validate=validate.Range(min=0, error="Daily calorie burn target cannot be negative")
    )

    weight_kg = fields.Float(
        required=False,
        validate=validate.Range(min=30, max=300, error="Weight must be between 30 and 300 kg")
    )

    height = fields.Nested(HeightInputSchema, required=False)

    @post_load
    def clean_data(self, data, **kwargs):
        """Clean and normalize data after validation"""
        # Strip whitespace
        for key, value in data.items():
            if isinstance(value, str):
                data[key] = value.strip()

        # Lowercase email
        if 'email' in data:
            data['email'] = data['email'].lower()

        return data


class UserCreateSchema(UserProfileSchema):
    username = fields.Str(
        required=True,
        validate=[
            validate.Length(min=3, max=50, error="Username must be between 3 and 50 characters"),
            validate.Regexp(
                r'^[a-zA-Z0-9_]+$',
                error="Username can only contain letters, numbers, and underscores"
            )
        ]
    )

    email = fields.Email(
        required=True,
        validate=validate.Length(max=100, error="Email must be less than 100 characters")
    )

    password = fields.Str(
        required=True,
        load_only=True,
        validate=validate.Length(min=8, max=120, error="Password must be between 8 and 120 characters")
    )

    role = fields.Str(
        required=False,
        load_default='USER',
        validate=validate.OneOf(USER_ROLES, error="Role must be one of: {choices}")
    )


class UserPatchSchema(UserProfileSchema):
    """Partial update: only the keys present in the payload are applied."""
    email = fields.Email(
        required=False,
        validate=validate.Length(max=100, error="Email must be less than 100 characters")
    )

    password = fields.Str(
        required=False,
        load_only=True,
        validate=validate.Length(min=8, max=120, error="Password must be between 8 and 120 characters")
    )

    account_status = fields.Str(
        required=False,
        validate=validate.OneOf(ACCOUNT_STATUSES, error="Account status must be one of: {choices}")
    )
