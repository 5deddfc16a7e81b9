# Settings package
from core.settings.app import AppSettings, get_app_settings
from core.settings.sections import RedisSettings, ServerSettings

__all__ = ["get_app_settings", "AppSettings", "RedisSettings", "ServerSettings"]
