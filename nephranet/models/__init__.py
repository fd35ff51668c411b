"""
Models Package

Exports all models for easy importing.
"""

from nephranet.models.user import User
from nephranet.models.reading import WaterQualityReading
from nephranet.models.record import ReadingRecord

__all__ = ['User', 'WaterQualityReading', 'ReadingRecord']
