"""
Configuration settings for the Nephranet water quality portal
"""
import os


class Config:
    """Flask application configuration"""

    # Flask secret key for sessions
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration (users always, readings when READING_STORE is 'sql')
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'nephranet.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Reading store: 'sql' (local database) or 'rest' (hosted PostgREST table)
    READING_STORE = os.environ.get('READING_STORE') or 'sql'
    SUPABASE_URL = os.environ.get('SUPABASE_URL')
    SUPABASE_KEY = os.environ.get('SUPABASE_KEY')
    SUPABASE_TABLE = os.environ.get('SUPABASE_TABLE') or 'wqi_uploads'
    STORE_TIMEOUT = 6

    # OpenCage forward geocoding
    OPENCAGE_API_KEY = os.environ.get('OPENCAGE_API_KEY')
    OPENCAGE_URL = 'https://api.opencagedata.com/geocode/v1/json'
    GEOCODER_COUNTRY_CODE = os.environ.get('GEOCODER_COUNTRY_CODE') or 'np'
    GEOCODER_TIMEOUT = 5

    # Map view
    MAP_CENTER = (27.7172, 85.324)  # Kathmandu
    MAP_ZOOM = 8
    MAP_TILE_URL = 'https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png'
    MAP_TILE_ATTRIBUTION = '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    READING_STORE = 'sql'
    OPENCAGE_API_KEY = 'test-key'
