import os
from datetime import timedelta


def _csv(value):
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///practrac.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT: bearer tokens in the Authorization header
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "practrac-dev-secret-change-in-production")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=int(os.getenv("JWT_EXPIRES_DAYS", "7")))
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_NAME = "Authorization"
    JWT_HEADER_TYPE = "Bearer"

    # CORS
    CORS_ORIGINS = _csv(os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"))

    # Request bodies carry court diagrams, keep the original 10mb ceiling
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024

    # Password policy
    PASSWORD_MIN_LENGTH = 8

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE")

    # Dev server
    HOST = os.getenv("HOST", "localhost")
    PORT = int(os.getenv("PORT", "3001"))


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class ProductionConfig(Config):
    DEBUG = False
    # these must come from the environment
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    LOG_FILE = os.getenv("LOG_FILE", "logs/practrac.log")


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY = "practrac-test-secret-with-enough-bytes-for-hs256"
    LOG_LEVEL = "WARNING"
    LOG_FILE = None


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
