"""Application configuration using Pydantic BaseSettings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """EncodeWatch configuration loaded from environment variables."""

    model_config = {"env_prefix": "ENCODEWATCH_", "env_file": ".env", "extra": "ignore"}

    # Encoder binary
    ffmpeg_binary: str = "ffmpeg"
    global_args: list[str] = ["-y", "-hide_banner"]

    # Diagnostic stream parsing
    frame_stat_marker: str = "frame="
    read_chunk_size: int = 4096
    stream_encoding: str = "utf-8"


def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
