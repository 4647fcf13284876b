"""Connection configuration entity."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RedisConfig(BaseSettings):
    """Connection settings for the backing store.

    Values can be passed directly or loaded from the environment
    (``KV_REDIS_ADDRESS``, ``KV_REDIS_PORT``, ``KV_REDIS_PASSWORD``,
    ``KV_REDIS_DB``) and from a ``.env`` file.

    An empty password means no authentication.
    """

    model_config = SettingsConfigDict(
        env_prefix="KV_REDIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    address: str = Field(default="localhost", min_length=1, description="Server host")
    port: int = Field(default=6379, ge=1, le=65535, description="Server port")
    password: str = Field(default="", description="AUTH password, empty for none")
    db: int = Field(default=0, ge=0, description="Logical database index")

    @property
    def addr(self) -> str:
        """Connection target as ``host:port``."""
        return f"{self.address}:{self.port}"

    @property
    def url(self) -> str:
        """Connection URL without credentials."""
        return f"redis://{self.addr}/{self.db}"
