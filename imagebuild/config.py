# imagebuild\config.py
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ImageBuildSettings(BaseSettings):
    """
    Environment overrides for the image build tooling.

    - IMAGEBUILD_DESCRIPTOR: default descriptor file when --descriptor is omitted
    - IMAGEBUILD_LOG_LEVEL / IMAGEBUILD_LOG_FORMAT ("console" or "json")
    """

    DESCRIPTOR: Optional[str] = None
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"

    model_config = SettingsConfigDict(env_prefix="IMAGEBUILD_", env_file=".env", extra="ignore")


def get_settings() -> ImageBuildSettings:
    return ImageBuildSettings()
