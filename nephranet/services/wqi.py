"""
Water Quality Index Services

Banded pH/turbidity scoring shared by the community list, the map and the API.
"""

import math


# (min_score, level, badge color, marker color, description)
WQI_BANDS = [
    (90, 'Excellent', 'success', '#22c55e', 'Safe for all uses'),
    (70, 'Good', 'primary', '#3b82f6', 'Suitable for most uses'),
    (50, 'Fair', 'warning', '#eab308', 'Treatment recommended before drinking'),
    (25, 'Poor', 'orange', '#f97316', 'Treatment required'),
    (0, 'Very Poor', 'danger', '#ef4444', 'Unsafe for consumption'),
]

GOOD_QUALITY_THRESHOLD = 70


def ph_score(ph):
    """Sub-score for pH, 100 inside the 6.5-8.5 optimum."""
    if 6.5 <= ph <= 8.5:
        return 100
    elif 6.0 <= ph < 6.5 or 8.5 < ph <= 9.0:
        return 80
    elif 5.5 <= ph < 6.0 or 9.0 < ph <= 9.5:
        return 60
    return 40


def turbidity_score(turbidity):
    """Sub-score for turbidity in NTU. Lower is better."""
    if turbidity <= 1:
        return 100
    elif turbidity <= 5:
        return 80
    elif turbidity <= 10:
        return 60
    elif turbidity <= 25:
        return 40
    return 20


def compute_wqi(ph, turbidity):
    """Calculate the WQI (0-100) from a pH and a turbidity reading.

    Out-of-range and NaN inputs fall through to the lowest sub-score band,
    so the result is always an integer between 20 and 100.
    """
    mean = (ph_score(ph) + turbidity_score(turbidity)) / 2
    return int(math.floor(mean + 0.5))


def wqi_status(wqi):
    """Get human-readable status for a WQI score"""
    for min_score, level, color, hex_color, description in WQI_BANDS:
        if wqi >= min_score:
            break
    return {
        'level': level,
        'color': color,
        'hex': hex_color,
        'description': description
    }


def wqi_legend():
    """Score ranges for each band, best first."""
    legend = []
    upper = 100
    for min_score, level, color, hex_color, description in WQI_BANDS:
        legend.append({
            'range': f'{min_score}-{upper}',
            'level': level,
            'color': color,
            'hex': hex_color,
            'description': description
        })
        upper = min_score - 1
    return legend


def is_good_quality(wqi):
    return wqi >= GOOD_QUALITY_THRESHOLD
