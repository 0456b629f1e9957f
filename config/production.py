import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "training_events"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

ROLE_TIE_BREAK = os.getenv("ROLE_TIE_BREAK", "ranked")
COMPANY_CLAUSE_GROUPING = os.getenv("COMPANY_CLAUSE_GROUPING", "grouped")

PERSIST_NOTIFICATIONS = bool(int(os.getenv("PERSIST_NOTIFICATIONS", "1")))
