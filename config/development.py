import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "campus_catalog"),
    "pool_size": int(os.getenv("DB_POOL_SIZE", "5")),
}

DEBUG = True

# If enabled, scripts apply schema.sql first (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo subjects/courses
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
