"""
Auth Blueprint
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from nephranet.auth import routes  # noqa: E402, F401
