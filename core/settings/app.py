# core/settings/app.py
from functools import lru_cache

from core.settings.sections.redis import RedisSettings
from core.settings.sections.server import ServerSettings


class AppSettings:
    """
    Central application settings aggregator.
    Settings are loaded lazily inside __init__
    to prevent eager evaluation at import time.
    """

    def __init__(self):
        self.redis = RedisSettings()
        self.server = ServerSettings()


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    return AppSettings()
