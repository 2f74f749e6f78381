import os

from config import db_config_from_env, default_company_id_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

STRICT_BREAK_ORDERING = bool(int(os.getenv("STRICT_BREAK_ORDERING", "1")))
DEFAULT_COMPANY_ID = default_company_id_from_env()
