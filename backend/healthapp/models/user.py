from werkzeug.security import generate_password_hash, check_password_hash
from healthapp import db
from healthapp.utils.timestamps import utcnow

GENDERS = ('MALE', 'FEMALE', 'OTHER')
ACTIVITY_LEVELS = ('SEDENTARY', 'LIGHTLY_ACTIVE', 'MODERATELY_ACTIVE', 'VERY_ACTIVE', 'EXTREMELY_ACTIVE')
USER_ROLES = ('USER', 'ADMIN')
ACCOUNT_STATUSES = ('ACTIVE', 'INACTIVE', 'DELETED')

class User(db.Model):
    __tablename__ = 'users'

    # Primary key
    id = db.Column(db.Integer, primary_key=True)

    # Authentication fields
    username = db.Column(db.String(50), unique=True, nullable=False, index=True)
    email = db.Column(db.String(100), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    # Profile fields
    first_name = db.Column(db.String(50), nullable=True)
    last_name = db.Column(db.String(50), nullable=True)
    phone_number = db.Column(db.String(20), nullable=True)
    date_of_birth = db.Column(db.Date, nullable=True)
    gender = db.Column(db.String(20), nullable=True)
    activity_level = db.Column(db.String(30), nullable=True)
    daily_calorie_intake_target = db.Column(db.Integer, nullable=True)
    daily_calorie_burn_target = db.Column(db.Integer, nullable=True)

    # Body measurements, always metric
    height_cm = db.Column(db.Float, nullable=True)
    weight_kg = db.Column(db.Float, nullable=True)  # Synced from the latest weight log entry

    role = db.Column(db.String(10), nullable=False, default='USER')
    account_status = db.Column(db.String(10), nullable=False, default='ACTIVE', index=True)

    # Timestamps
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    weight_entries = db.relationship('WeightEntry', back_populates='user', lazy='dynamic')

    def set_password(self, password):
        """Hash and set password"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Check if provided password matches hash"""
        return check_password_hash(self.password_hash, password)

    @property
    def is_deleted(self) -> bool:
        return self.account_status == 'DELETED'

    def height_measurements(self):
        """Stored height expressed in every supported unit, or None when no height is set."""
        from healthapp.utils.unit_conversion import HeightUnit, from_centimeters

        if self.height_cm is None:
            return None

        return {
            'cm': from_centimeters(self.height_cm, HeightUnit.CENTIMETERS).to_dict(),
            'feet': from_centimeters(self.height_cm, HeightUnit.FEET).to_dict()
        }

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'phone_number': self.phone_number,
            'date_of_birth': self.date_of_birth.isoformat() if self.date_of_birth else None,
            'gender': self.gender,
            'activity_level': self.activity_level,
            'daily_calorie_intake_target': self.daily_calorie_intake_target,
            'daily_calorie_burn_target': self.daily_calorie_burn_target,
            'weight_kg': self.weight_kg,
            'height_cm': self.height_cm,
            'height': self.height_measurements(),
            'role': self.role,
            'account_status': self.account_status,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        return f'<User {self.username}>'
