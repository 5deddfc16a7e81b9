from typing import Optional

from pydantic_settings import BaseSettings


class RedisSettings(BaseSettings):
    """
    Settings for the Redis connection.
    Loaded automatically from the environment / .env with prefix REDIS_*
    """

    url: str = "redis://localhost:6379/0"
    socket_timeout: Optional[float] = 5.0

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "REDIS_",
        "extra": "ignore",
    }
