"""
Water Quality Reading Model
"""

from nephranet.extensions import db
from nephranet.models.record import ReadingRecord


class WaterQualityReading(db.Model):
    """Community-submitted pH/turbidity measurement"""
    __tablename__ = 'wqi_uploads'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    location = db.Column(db.String(255), nullable=False)
    username = db.Column(db.String(80), nullable=False)
    ph = db.Column(db.Float, nullable=False)
    turbidity = db.Column(db.Float, nullable=False)  # NTU
    latitude = db.Column(db.Float)
    longitude = db.Column(db.Float)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp(), index=True)

    def to_record(self):
        return ReadingRecord(
            id=self.id,
            user_id=self.user_id,
            location=self.location,
            username=self.username,
            ph=self.ph,
            turbidity=self.turbidity,
            latitude=self.latitude,
            longitude=self.longitude,
            created_at=self.created_at,
        )

    def __repr__(self):
        return f'<WaterQualityReading {self.location} pH:{self.ph} NTU:{self.turbidity}>'
