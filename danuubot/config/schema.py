"""Configuration schema using Pydantic."""

from typing import Literal
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BridgeConfig(BaseModel):
    """WhatsApp bridge connection configuration."""
    url: str = "http://localhost:3001"
    auth_dir: str = "auth_info_baileys"  # Credential directory owned by the bridge
    browser: list[str] = Field(default_factory=lambda: ["DANUU-MD", "Chrome", "1.0.0"])
    timeout: float = 30.0  # Seconds per HTTP call


class FeaturesConfig(BaseModel):
    """Initial state of the toggleable automations."""
    auto_status_view: bool = True
    anti_delete: bool = True


class ReactionsConfig(BaseModel):
    """Emojis used by the automation handlers."""
    status_emoji: str = "👻"
    auto_react_emoji: str = "🔥"


class CommandsConfig(BaseModel):
    """Command parsing configuration."""
    prefix: str = "."


class AntiDeleteConfig(BaseModel):
    """Anti-delete message cache configuration."""
    cache_size: int = 500  # Recent message bodies kept for recovery (0 = notify only)


class ReconnectConfig(BaseModel):
    """Reconnect policy for dropped connections."""
    max_attempts: int = 10  # 0 = unlimited
    base_delay: float = 1.0  # Seconds
    max_delay: float = 60.0


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class Config(BaseSettings):
    """Root configuration for DanuuBot."""
    model_config = SettingsConfigDict(env_prefix="DANUUBOT_", env_nested_delimiter="__")

    bridge: BridgeConfig = Field(default_factory=BridgeConfig)
    features: FeaturesConfig = Field(default_factory=FeaturesConfig)
    reactions: ReactionsConfig = Field(default_factory=ReactionsConfig)
    commands: CommandsConfig = Field(default_factory=CommandsConfig)
    anti_delete: AntiDeleteConfig = Field(default_factory=AntiDeleteConfig)
    reconnect: ReconnectConfig = Field(default_factory=ReconnectConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
