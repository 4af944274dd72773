"""
User Model
"""

from flask_login import UserMixin
from sqlalchemy import text

from portal.extensions import db
from portal.sessions.manager import utcnow


class User(UserMixin, db.Model):
    """User model for authentication.

    Rows are never removed: ``deleted_at`` marks a soft-deleted user, and the
    username only has to be unique among live rows.
    """
    __tablename__ = 'users'
    __table_args__ = (
        db.Index(
            'uq_users_username_live', 'username', unique=True,
            sqlite_where=text('deleted_at IS NULL'),
            postgresql_where=text('deleted_at IS NULL'),
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = db.Column(db.DateTime, index=True)
    username = db.Column(db.String(80), nullable=False)
    password = db.Column(db.String(255), nullable=False)  # werkzeug hash

    @classmethod
    def live(cls):
        """Query over users that have not been soft-deleted."""
        return cls.query.filter(cls.deleted_at.is_(None))

    def soft_delete(self):
        self.deleted_at = utcnow()

    def to_dict(self):
        """Public representation; the password hash is never serialized."""
        return {
            'id': self.id,
            'username': self.username,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<User {self.username}>'
