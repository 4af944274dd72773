"""
Sessions Package

Server-side sessions and the flash queue kept inside them.
"""

from portal.sessions.manager import Session, SessionManager
from portal.sessions.flashes import FlashEntry, flash, drain, peek

__all__ = ['Session', 'SessionManager', 'FlashEntry', 'flash', 'drain', 'peek']
