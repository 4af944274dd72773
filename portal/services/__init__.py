"""
Services Package

Exports all services for easy importing.
"""

from portal.services.users import find_by_username, get_user, create_user, list_users
from portal.services.accounts import validate_credentials, register, authenticate

__all__ = [
    'find_by_username',
    'get_user',
    'create_user',
    'list_users',
    'validate_credentials',
    'register',
    'authenticate',
]
