# -*- coding: utf-8 -*-
from . import getenv_or_action

# Logging
LOG_LEVEL = getenv_or_action("LOG_LEVEL", default="INFO")

# Sentry
SENTRY_ENABLE = False
SENTRY_DSN = None
SENTRY_ENVIRONMENT = None

# Analytics
ANALYTICS_SERVICE_NAME = "DBSCAN Geospatial Analytics API"
ANALYTICS_SERVICE_VERSION = "1.0.0"
ANALYTICS_DEFAULT_MAX_DISTANCE_KM = float(
    getenv_or_action("ANALYTICS_DEFAULT_MAX_DISTANCE_KM", default="1000")
)
ANALYTICS_DEFAULT_MIN_POINTS = int(
    getenv_or_action("ANALYTICS_DEFAULT_MIN_POINTS", default="3")
)

# Cache configuration
CACHE_KEY_PREFIX = getenv_or_action("CACHE_KEY_PREFIX", default="compliance")
CACHE_DEFAULT_TTL = int(getenv_or_action("CACHE_DEFAULT_TTL", default=60 * 5))
CACHE_ANALYTICS_TTL = int(getenv_or_action("CACHE_ANALYTICS_TTL", default=60 * 10))

# Rate limits
RATE_LIMIT_DEFAULT = getenv_or_action("RATE_LIMIT_DEFAULT", default="100/minute")
# Empty means "use Redis"
RATE_LIMIT_STORAGE_URI = getenv_or_action("RATE_LIMIT_STORAGE_URI", action="ignore")
