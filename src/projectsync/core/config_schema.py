"""Configuration schema: Pydantic models for projectsync config files."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiConfig(BaseModel):
    """Remote project service connection."""
    base_url: str = Field("http://localhost:5678", alias="baseUrl")
    timeout: float = 30.0
    headers: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class ProjectsConfig(BaseModel):
    """Project feature limits.

    ``team_limit`` is the number of team projects allowed: ``-1`` means
    unlimited and ``0`` disables team projects.
    """
    team_limit: int = Field(0, alias="teamLimit", ge=-1)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: Optional[str] = None
    format: Optional[Literal["kv", "json", "pretty"]] = None
    console: Optional[bool] = None
    file: Optional[bool] = None
    dev_file: Optional[bool] = Field(None, alias="devFile")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class Config(BaseModel):
    """Main configuration schema."""
    schema_: Optional[str] = Field(None, alias="$schema")
    log_level: Optional[str] = Field(None, alias="logLevel")
    logging: Optional[LoggingConfig] = None

    api: ApiConfig = Field(default_factory=ApiConfig)
    projects: ProjectsConfig = Field(default_factory=ProjectsConfig)
    scopes: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow", populate_by_name=True)
