#!filepath: srsglass/config/output_config.py
from pydantic import BaseModel


class OutputConfig(BaseModel):
    dir: str = "."
    # {date} -> dump date (YYYY-MM-DD)
    filename_template: str = "spyglass{date}.xlsx"
