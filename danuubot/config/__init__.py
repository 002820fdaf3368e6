"""Configuration module for DanuuBot."""

from danuubot.config.loader import load_config, save_config, get_config_path, get_data_dir
from danuubot.config.schema import Config

__all__ = ["Config", "load_config", "save_config", "get_config_path", "get_data_dir"]
