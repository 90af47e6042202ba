#!filepath: learnet/config/__init__.py
from .app_config import AppConfig
from .log_config import LogConfig
from .network_config import NetworkConfig

# active settings read by the engine at call time
settings: AppConfig = AppConfig()


def configure(cfg: AppConfig) -> AppConfig:
    """Install ``cfg`` as the active settings and rebuild the log sinks."""
    global settings
    from learnet.utils.logger import init_logging

    settings = cfg
    init_logging(cfg.log)
    return settings


__all__ = ["AppConfig", "LogConfig", "NetworkConfig", "settings", "configure"]
