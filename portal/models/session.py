"""
Session Model
"""

from portal.extensions import db


class SessionRecord(db.Model):
    """Server-side session state keyed by the opaque cookie token"""
    __tablename__ = 'sessions'

    id = db.Column(db.String(64), primary_key=True)
    data = db.Column(db.JSON, nullable=False, default=dict)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)

    def __repr__(self):
        return f'<SessionRecord {self.id[:8]}... expires {self.expires_at}>'
