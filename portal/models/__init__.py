"""
Models Package

Exports all models for easy importing.
"""

from portal.models.user import User
from portal.models.session import SessionRecord

__all__ = ['User', 'SessionRecord']
