# config.py

import os

from dotenv import load_dotenv

load_dotenv()


class BaseConfig:
    DEBUG = False
    TESTING = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    # Location of the JSON document holding every order
    DB = os.environ.get("DB", "./db.json")
    PORT = int(os.environ.get("PORT", "8080"))
    # Resolved against the working directory, like DB
    INDEX_PAGE = os.environ.get("INDEX_PAGE", "./index.html")
    RATELIMIT_ENABLED = True
    RATE_LIMITS = ["100/hour"]


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG").upper()
    RATE_LIMITS = ["200/hour"]  # Higher limit for development


class StagingConfig(BaseConfig):
    DEBUG = True
    RATE_LIMITS = ["50/hour"]


class ProductionConfig(BaseConfig):
    RATE_LIMITS = ["20/minute"]


class TestingConfig(BaseConfig):
    TESTING = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING").upper()
    # Generous enough for a whole test run; tests lower it to exercise 429s
    RATE_LIMITS = ["1000/minute"]


def get_config():
    env = os.environ.get("FLASK_ENV", "development")
    if env == "production":
        return ProductionConfig
    elif env == "staging":
        return StagingConfig
    elif env == "testing":
        return TestingConfig
    else:
        return DevelopmentConfig
