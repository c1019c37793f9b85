from pathlib import Path
from typing import Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    config_path: str = Field(default="config.json", alias="CONFIG_PATH")
    poll_interval_sec: float = Field(default=1.0, gt=0, alias="POLL_INTERVAL_SEC")
    http_timeout_sec: float = Field(default=10.0, alias="HTTP_TIMEOUT_SEC")
    log_format: str = Field(default="plain", alias="LOG_FORMAT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    metrics_port: int = Field(default=0, alias="METRICS_PORT")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


class ConfigError(Exception):
    pass


class WatchConfig(BaseModel):
    """API key and the channel to watch, as read from config.json."""

    api_key: str = Field(min_length=1)
    channel: str = Field(min_length=1)

    model_config = ConfigDict(frozen=True, extra="ignore")


def load_config(path: Union[str, Path]) -> WatchConfig:
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e
    try:
        return WatchConfig.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigError(f"invalid config in {path}: {e}") from e

settings = Settings()
