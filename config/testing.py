from .config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"
MONGODB_DB = "late_comers_test"
CRON_SECRET_TOKEN = "test-cron-token"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
