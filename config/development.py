import os

from .base import *  # noqa: F401,F403
from .base import _flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
JWT_SECRET = os.getenv("JWT_SECRET", "dev-jwt-secret")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

# Schema is CREATE IF NOT EXISTS, safe to apply on every start
AUTO_INIT_DB = _flag("AUTO_INIT_DB", "1")
