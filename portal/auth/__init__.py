"""
Auth Blueprint

Registration, login and logout on top of server-side sessions.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from portal.auth import routes  # noqa: E402, F401
