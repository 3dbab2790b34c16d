import os
from dotenv import load_dotenv
load_dotenv()

def _db_url():
    # In-memory by default: nothing outlives the process.
    uri = os.getenv("DATABASE_URL", "sqlite://")
    if uri.startswith("postgres://"):
        uri = uri.replace("postgres://", "postgresql://", 1)
    return uri

def _flag(name, default):
    return os.getenv(name, default).strip().lower() not in ("0", "false", "no", "off")

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-jwt-change")
    SQLALCHEMY_DATABASE_URI = _db_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SESSION_COOKIE_SECURE = False
    REMEMBER_COOKIE_SECURE = False
    WTF_CSRF_TIME_LIMIT = None

    MAX_GROUP_SIZE = int(os.getenv("MAX_GROUP_SIZE", "5"))
    LOGIN_DELAY_SECONDS = float(os.getenv("LOGIN_DELAY_SECONDS", "0.5"))
    SEED_ON_STARTUP = _flag("SEED_ON_STARTUP", "1")
    SEED_ACKNOWLEDGMENTS = _flag("SEED_ACKNOWLEDGMENTS", "1")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    LOGIN_DELAY_SECONDS = 0
    SEED_ON_STARTUP = True
    SEED_ACKNOWLEDGMENTS = False
    LOG_LEVEL = "DEBUG"
