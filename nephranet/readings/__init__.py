"""
Readings Blueprint

Home page, reading upload, community list, map and JSON API.
"""

from flask import Blueprint

readings_bp = Blueprint('readings', __name__)

from nephranet.readings import routes  # noqa: E402, F401
