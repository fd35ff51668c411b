"""
Services Package

Exports all services for easy importing.
"""

from nephranet.services.wqi import compute_wqi, ph_score, turbidity_score, wqi_status, wqi_legend
from nephranet.services.store import SqlReadingStore, RestReadingStore, build_store, get_store
from nephranet.services.geocoding import OpenCageGeocoder, build_geocoder, get_geocoder

__all__ = [
    'compute_wqi',
    'ph_score',
    'turbidity_score',
    'wqi_status',
    'wqi_legend',
    'SqlReadingStore',
    'RestReadingStore',
    'build_store',
    'get_store',
    'OpenCageGeocoder',
    'build_geocoder',
    'get_geocoder'
]
