"""
Reading Record

Storage-independent view of a water quality reading, returned by every store.
"""

import math
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Optional


@dataclass
class ReadingRecord:
    id: int
    user_id: str
    location: str
    username: str
    ph: float
    turbidity: float
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    created_at: Optional[datetime] = None

    @property
    def has_coordinates(self):
        """True when the reading can be placed on the map."""
        lat, lon = self.latitude, self.longitude
        if lat is None or lon is None:
            return False
        if not (math.isfinite(lat) and math.isfinite(lon)):
            return False
        return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0

    @classmethod
    def from_row(cls, row):
        """Build a record from a JSON row as returned by the hosted table."""
        return cls(
            id=int(row['id']),
            user_id=str(row.get('user_id') or ''),
            location=row.get('location') or '',
            username=row.get('username') or 'Anonymous',
            ph=float(row['ph']),
            turbidity=float(row['turbidity']),
            latitude=_to_float(row.get('latitude')),
            longitude=_to_float(row.get('longitude')),
            created_at=_to_datetime(row.get('created_at')),
        )

    def to_dict(self):
        data = asdict(self)
        data['created_at'] = self.created_at.isoformat() if self.created_at else None
        return data


def _to_float(value):
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_datetime(value):
    if value is None or isinstance(value, datetime):
        return value
    try:
        # PostgREST emits a trailing 'Z' for UTC on some deployments
        return datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        return None
