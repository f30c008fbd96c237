# -*- coding: utf-8 -*-
"""Test configuration with safe defaults and no external services."""

from . import getenv_or_action
from .base import *  # noqa: F401, F403

# Logging
LOG_LEVEL = "DEBUG"

# Database configuration (in-memory SQLite)
DATABASE_URL = getenv_or_action("TEST_DATABASE_URL", default="sqlite://:memory:")

# CORS configuration
ALLOWED_ORIGINS = ["*"]
ALLOWED_ORIGINS_REGEX = None
ALLOWED_METHODS = ["*"]
ALLOWED_HEADERS = ["*"]
ALLOW_CREDENTIALS = True

# Redis configuration (use test Redis)
REDIS_HOST = getenv_or_action("TEST_REDIS_HOST", default="localhost")
REDIS_PORT = int(getenv_or_action("TEST_REDIS_PORT", default="6379"))
REDIS_DB = int(getenv_or_action("TEST_REDIS_DB", default="1"))  # Different DB for tests
REDIS_PASSWORD = None

# Rate limits (more permissive for tests, kept in memory)
RATE_LIMIT_DEFAULT = "10000/second"
RATE_LIMIT_STORAGE_URI = "memory://"

# Cache configuration (shorter TTLs for tests)
CACHE_KEY_PREFIX = "compliance-test"
CACHE_DEFAULT_TTL = 10
CACHE_ANALYTICS_TTL = 10
