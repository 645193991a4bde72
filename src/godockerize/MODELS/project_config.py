"""
Models for the optional project config file.
"""
from typing import List, Optional
from pydantic import BaseModel

class ProjectConfig(BaseModel):
    """
    Defaults read from `godockerize.yml`. Command line flags take precedence.
    """
    base: Optional[str] = None
    tag: Optional[str] = None
    env: List[str] = []
