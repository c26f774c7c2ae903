from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"

DEBUG = False
TESTING = True

SCHEDULER_ENABLED = False
AUTO_INIT_DB = False
AUTO_SEED_DB = False
