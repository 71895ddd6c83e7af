"""
Environment-aware configuration.
Values come from the process environment, with .env loaded first if present.
"""
import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()  # Read .env if present

DEV_JWT_SECRET = "dev-secret-change-me"


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    APP_ENV = os.getenv("APP_ENV", "dev")
    # "dev" unlocks POST /admin/reset
    PLATFORM = os.getenv("PLATFORM", "prod")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///chirpy.db")
    SQL_ECHO = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Access tokens (HS256 JWT) and refresh tokens
    JWT_SECRET = os.getenv("JWT_SECRET", DEV_JWT_SECRET)
    JWT_LEEWAY_SECONDS = int(os.getenv("JWT_LEEWAY_SECONDS", "0"))
    ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    REFRESH_TOKEN_EXPIRES = timedelta(days=60)

    # Payment provider webhook key; empty disables the check
    POLKA_KEY = os.getenv("POLKA_KEY", "")

    FILESERVER_ROOT = os.getenv("FILESERVER_ROOT", os.getcwd())
    PROFANE_WORDS = [
        w.strip().lower()
        for w in os.getenv("PROFANE_WORDS", "kerfuffle,sharbert,fornax").split(",")
        if w.strip()
    ]


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQL_ECHO = True
    # In dev, propagate exceptions so our error handler has full context
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    DEBUG = False


class TestingConfig(BaseConfig):
    TESTING = True
    PLATFORM = "dev"
    DATABASE_URL = "sqlite://"
    JWT_SECRET = "test-secret-key-for-chirpy-hs256-signing"
    POLKA_KEY = "test-polka-key"
    LOG_LEVEL = "DEBUG"


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/prod/test).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
