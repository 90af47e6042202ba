#!filepath: learnet/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig
from .network_config import NetworkConfig


def package_root() -> str:
    """
    learnet/config/app_config.py -> learnet/config -> learnet
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)

    @classmethod
    def load(cls, path: str | None = None, env_file: str | None = None) -> "AppConfig":
        """
        Load YAML configuration + .env
        - default file: learnet/config/base.yml
        - LEARNET_LOG_LEVEL overrides log.level
        """
        # 1) .env (cwd by default)
        load_dotenv(env_file)

        # 2) resolve config file
        if path is None:
            path = os.path.join(package_root(), "config", "base.yml")

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) read YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        level = os.getenv("LEARNET_LOG_LEVEL")
        if level:
            raw.setdefault("log", {})["level"] = level

        return cls(**raw)
