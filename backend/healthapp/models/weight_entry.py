from healthapp import db
from healthapp.utils.timestamps import utcnow

ENTRY_STATUSES = ('ACTIVE', 'DELETED')


class WeightEntry(db.Model):
    """
    One weight measurement logged by a user.
    Entries are soft deleted; the user's profile weight mirrors the most recent active entry.
    """
    __tablename__ = 'weight_logs'
    __table_args__ = (
        db.Index('idx_weight_user_logged_at', 'user_id', 'logged_at'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)

    logged_at = db.Column(db.DateTime, nullable=False, index=True)
    weight = db.Column(db.Numeric(5, 2, asdecimal=False), nullable=False)  # Kilograms
    note = db.Column(db.String(200), nullable=True)

    status = db.Column(db.String(20), nullable=False, default='ACTIVE', index=True)

    # Timestamps
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    user = db.relationship('User', back_populates='weight_entries')

    def __repr__(self):
        return f'<WeightEntry {self.id} user={self.user_id} logged_at={self.logged_at}>'

    @property
    def is_active(self) -> bool:
        return self.status == 'ACTIVE'

    def to_dict(self):
        """Convert to dictionary for API responses."""
        return {
            'id': self.id,
            'user_id': self.user_id,
            'logged_at': self.logged_at.isoformat() if self.logged_at else None,
            'weight': self.weight,
            'note': self.note,
            'status': self.status.lower() if self.status else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }
