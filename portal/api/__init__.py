"""
API Blueprint

JSON endpoints.
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__)

from portal.api import routes  # noqa: E402, F401
