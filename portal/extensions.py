"""
Flask Extensions

Sessions are server-side rows addressed by an opaque cookie token; the
Flask-Login manager only exposes the user resolved from them.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

from portal.sessions.manager import SessionManager

# Database instance
db = SQLAlchemy()

# Login manager, fed by the auth middleware instead of Flask's cookie session
login_manager = LoginManager()

# Server-side session store
sessions = SessionManager()
