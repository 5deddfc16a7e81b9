from pydantic import Field
from pydantic_settings import BaseSettings


class ServerSettings(BaseSettings):
    """
    Settings for the HTTP listener and its shutdown behaviour.
    Loaded automatically from the environment / .env with prefix SERVER_*
    """

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=0, le=65535)
    shutdown_grace_seconds: float = Field(default=10.0, gt=0)
    page_size: int = Field(default=50, ge=1)
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "SERVER_",
        "extra": "ignore",
    }
