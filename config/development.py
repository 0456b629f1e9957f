import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "training_events"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# "ranked" or "first_row": which authority wins when a manager has several company_users rows.
ROLE_TIE_BREAK = os.getenv("ROLE_TIE_BREAK", "ranked")
# "grouped" or "legacy": grouping of the company-manager pending clause.
COMPANY_CLAUSE_GROUPING = os.getenv("COMPANY_CLAUSE_GROUPING", "grouped")

PERSIST_NOTIFICATIONS = bool(int(os.getenv("PERSIST_NOTIFICATIONS", "1")))
