#!filepath: srsglass/config/dump_config.py
from pydantic import BaseModel, Field


class DumpConfig(BaseModel):
    """
    Snapshot source settings.

    url          : daily regions dump (gzip XML)
    path         : local copy, reused when use_existing is set
    timeout      : HTTP timeout in seconds
    """

    url: str = "https://www.nationstates.net/pages/regions.xml.gz"
    path: str = "regions.xml.gz"
    timeout: float = Field(default=60.0, gt=0)
    use_existing: bool = False
    max_attempts: int = Field(default=3, ge=1)
