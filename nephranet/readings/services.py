"""
Readings Services

Submission, listing and aggregation logic for community readings.
"""

import logging
import math

from nephranet.errors import SubmissionError
from nephranet.services.wqi import compute_wqi, wqi_status, is_good_quality, WQI_BANDS

logger = logging.getLogger(__name__)

SORT_OPTIONS = {
    'date': 'Sort by Date',
    'location': 'Sort by Location',
    'ph': 'Sort by pH',
    'turbidity': 'Sort by Turbidity'
}

QUALITY_OPTIONS = {
    'all': 'All Quality',
    'good': 'Good Quality',
    'poor': 'Poor Quality'
}


def _parse_number(raw):
    try:
        value = float(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def submit_reading(store, geocoder, user, location, ph, turbidity):
    """Validate, geocode and store a new reading.

    Args:
        store: Reading store the reading is written to
        geocoder: Geocoder used to place the location name
        user: Submitting user (needs `id` and `display_name`)
        location, ph, turbidity: Raw form values

    Returns:
        The stored ReadingRecord
    """
    location = (location or '').strip()
    if not location:
        raise SubmissionError('Location is required')

    ph_value = _parse_number(ph)
    if ph_value is None or ph_value < 0 or ph_value > 14:
        raise SubmissionError('pH must be between 0 and 14')

    turbidity_value = _parse_number(turbidity)
    if turbidity_value is None or turbidity_value < 0:
        raise SubmissionError('Turbidity must be a positive number')

    latitude, longitude = geocoder.geocode(location)

    record = store.add_reading(
        user_id=user.id,
        username=user.display_name,
        location=location,
        ph=ph_value,
        turbidity=turbidity_value,
        latitude=latitude,
        longitude=longitude
    )
    logger.info('Reading %s stored for %s by %s', record.id, location, record.username)
    return record


def annotate(records):
    """Pair each record with its WQI and display status."""
    items = []
    for record in records:
        wqi = compute_wqi(record.ph, record.turbidity)
        items.append({
            'reading': record,
            'wqi': wqi,
            'status': wqi_status(wqi)
        })
    return items


def filter_readings(items, search='', quality='all'):
    """Filter annotated readings by search text and quality band."""
    term = (search or '').strip().lower()
    filtered = []
    for item in items:
        reading = item['reading']
        if term and term not in reading.location.lower() and term not in reading.username.lower():
            continue
        if quality == 'good' and not is_good_quality(item['wqi']):
            continue
        if quality == 'poor' and is_good_quality(item['wqi']):
            continue
        filtered.append(item)
    return filtered


def sort_readings(items, sort_by='date'):
    """Sort annotated readings. Unknown keys sort by date."""
    if sort_by == 'location':
        return sorted(items, key=lambda x: x['reading'].location.casefold())
    if sort_by == 'ph':
        return sorted(items, key=lambda x: x['reading'].ph, reverse=True)
    if sort_by == 'turbidity':
        return sorted(items, key=lambda x: x['reading'].turbidity)
    return sorted(items, key=_created_key, reverse=True)


def _created_key(item):
    created = item['reading'].created_at
    # undated readings go last
    if created is None:
        return (0, 0.0)
    return (1, created.timestamp())


def compute_statistics(items):
    """Compute summary statistics for the community page."""
    band_counts = {band[1]: 0 for band in WQI_BANDS}
    for item in items:
        band_counts[item['status']['level']] += 1

    total = len(items)
    avg_wqi = round(sum(item['wqi'] for item in items) / total, 1) if total else None

    return {
        'total_readings': total,
        'unique_locations': len({item['reading'].location for item in items}),
        'contributors': len({item['reading'].username for item in items}),
        'avg_wqi': avg_wqi,
        'avg_status': wqi_status(avg_wqi) if avg_wqi is not None else None,
        'band_counts': band_counts
    }


def map_points(records):
    """Marker data for readings that have usable coordinates."""
    points = []
    for record in records:
        if not record.has_coordinates:
            continue
        wqi = compute_wqi(record.ph, record.turbidity)
        status = wqi_status(wqi)
        points.append({
            'id': record.id,
            'lat': record.latitude,
            'lng': record.longitude,
            'location': record.location,
            'ph': record.ph,
            'turbidity': record.turbidity,
            'username': record.username,
            'wqi': wqi,
            'label': status['level'],
            'color': status['hex']
        })
    return points
