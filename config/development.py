import os

from config import db_config_from_env, default_company_id_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env()

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# 0 accepts break events in any order (clock_out closes any open session)
STRICT_BREAK_ORDERING = bool(int(os.getenv("STRICT_BREAK_ORDERING", "1")))
DEFAULT_COMPANY_ID = default_company_id_from_env()
