"""
User Model
"""

from datetime import datetime

from flask_login import UserMixin

from nephranet.extensions import db


class User(UserMixin, db.Model):
    """Contributor account"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    name = db.Column(db.String(80))
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def display_name(self):
        """Name shown next to submitted readings."""
        if self.name and self.name.strip():
            return self.name.strip()
        if self.email and self.email.split('@')[0]:
            return self.email.split('@')[0]
        return 'Anonymous'

    def __repr__(self):
        return f'<User {self.email}>'
