"""
Configuration settings for the Portal application
"""
import os
from datetime import timedelta


class Config:
    """Flask application configuration"""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'site.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Server-side sessions
    SESSION_TOKEN_COOKIE = 'session_token'
    SESSION_LIFETIME = timedelta(hours=24)

    # Extra cookie issued on login, mirrors the session token
    LOGIN_COOKIE_NAME = 'session_id'
    LOGIN_COOKIE_LIFETIME = timedelta(hours=1)

    MIN_CREDENTIAL_LENGTH = 5

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    LOG_LEVEL = 'DEBUG'
