#!filepath: learnet/config/network_config.py
from pydantic import BaseModel, Field


class NetworkConfig(BaseModel):
    """
    Engine-wide defaults.

    verbosity:
        default verbosity of the scheduler / machine fit
        (< 0 silent, 0 warnings only, >= 1 progress messages)
    warn_on_source_copy:
        log a warning when export duplicates an unsubstituted source
    warn_on_multiple_origins:
        log a warning when a node with several origins is built
    """

    verbosity: int = Field(default=1, ge=-1)
    warn_on_source_copy: bool = True
    warn_on_multiple_origins: bool = True
