"""
API Routes
"""

from flask import jsonify

from portal.api import api_bp
from portal.services import list_users


@api_bp.route('/users')
def users():
    """All live users, without password hashes"""
    return jsonify([user.to_dict() for user in list_users()])
