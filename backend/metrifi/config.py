import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SITE_URL = os.getenv("SITE_URL", "http://localhost:5000").rstrip("/")
    PLUGIN_VERSION = "1.2"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Page creation
    PAGE_STATUS = os.getenv("PAGE_STATUS", "draft")  # draft | publish
    BLOCK_SANITIZATION = os.getenv("BLOCK_SANITIZATION", "recursive")  # recursive | none

    # Custom fields
    FIELD_WRITES_ENABLED = _env_flag("FIELD_WRITES_ENABLED", True)
    EXPOSE_FIELDS_IN_REST = _env_flag("EXPOSE_FIELDS_IN_REST", True)
    CONTENT_BLOCKS_FIELD = "content_blocks"
    FALLBACK_FIELD_KEY = os.getenv("FALLBACK_FIELD_KEY", "field_5b92ba6a9b055")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///metrifi-dev.db")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SITE_URL = "http://example.test"
    PAGE_STATUS = "draft"
    BLOCK_SANITIZATION = "recursive"
    FIELD_WRITES_ENABLED = True
    EXPOSE_FIELDS_IN_REST = True
    FALLBACK_FIELD_KEY = "field_5b92ba6a9b055"


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
