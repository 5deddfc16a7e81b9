from core.settings.sections.redis import RedisSettings
from core.settings.sections.server import ServerSettings

__all__ = ["RedisSettings", "ServerSettings"]
