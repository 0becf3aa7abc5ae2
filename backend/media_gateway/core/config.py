from functools import lru_cache
from typing import Literal

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    env: Literal["local", "prod", "test"] = Field(default="local", alias="ENV")
    debug: bool = Field(default=False, alias="DEBUG")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=5000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    s3_endpoint: HttpUrl | None = Field(default=None, alias="S3_ENDPOINT_URL")
    s3_region: str | None = Field(default=None, alias="S3_REGION")
    s3_access_key: str | None = Field(default=None, alias="S3_ACCESS_KEY")
    s3_secret_key: str | None = Field(default=None, alias="S3_SECRET_KEY")
    s3_bucket: str = Field(..., min_length=1, alias="S3_BUCKET")
    s3_force_path_style: bool = Field(default=False, alias="S3_FORCE_PATH_STYLE")

    s3_connect_timeout: float = Field(default=10, gt=0, alias="S3_CONNECT_TIMEOUT")
    s3_read_timeout: float = Field(default=60, gt=0, alias="S3_READ_TIMEOUT")

    stream_chunk_size: int = Field(default=64 * 1024, gt=0, alias="STREAM_CHUNK_SIZE")


@lru_cache
def get_settings() -> Settings:
    return Settings()
