import os
from dotenv import load_dotenv
load_dotenv()

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///boardeval.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # optional: when unset, ballot locks are process-local only
    REDIS_URL = os.getenv("REDIS_URL")
    RATING_LOCK_TIMEOUT = float(os.getenv("RATING_LOCK_TIMEOUT", "10"))
    SUPER_ADMIN_EMAIL = os.getenv("SUPER_ADMIN_EMAIL", "")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    WTF_CSRF_ENABLED = os.getenv("WTF_CSRF_ENABLED", "1") not in ("0", "false", "False")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    REDIS_URL = None
    SUPER_ADMIN_EMAIL = "root@board.example.org"
    WTF_CSRF_ENABLED = False
    LOG_LEVEL = "DEBUG"
