"""Runtime configuration for the model service layer.

Settings come from ``config/settings.yaml`` (when present) and from the
environment. Environment variables use ``__`` as the nested delimiter, e.g.
``NEO4J__PASSWORD`` or ``APP__LOG_LEVEL``, and take precedence over the YAML
file.
"""

from pathlib import Path
from typing import Any, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parents[2] / "config" / "settings.yaml"


class Neo4jSettingsModel(BaseSettings):
    """Connection details for a Neo4j database."""

    scheme: str = "neo4j"
    host: str = "localhost"
    port: int = 7687
    uri: Optional[str] = Field(
        default=None,
        description="Full connection URI; overrides scheme/host/port when set",
    )
    user: Optional[str] = "neo4j"
    password: Optional[str] = "password"
    database: str = "neo4j"
    max_connection_lifetime: int = 3600
    max_connection_pool_size: int = 50
    connection_acquisition_timeout: int = 60

    model_config = SettingsConfigDict(env_prefix="NEO4J_", env_file=".env", extra="ignore")

    @property
    def connection_uri(self) -> str:
        return self.uri or f"{self.scheme}://{self.host}:{self.port}"


class NeptuneSettingsModel(BaseSettings):
    """Connection details for an Amazon Neptune openCypher endpoint."""

    host: str = ""
    port: int = 8182
    region: str = "us-east-1"
    database: Optional[str] = None
    max_connection_lifetime: int = 3600
    max_connection_pool_size: int = 50
    connection_acquisition_timeout: int = 60

    model_config = SettingsConfigDict(env_prefix="NEPTUNE_", env_file=".env", extra="ignore")


class AppSettingsModel(BaseModel):
    """Library-level settings."""

    name: str = "neo4j-model-service"
    log_level: str = "INFO"
    constraints_file: Optional[str] = None


class SettingsFileModel(BaseModel):
    """Schema for validating `settings.yaml`."""

    app: AppSettingsModel = Field(default_factory=AppSettingsModel)
    backend: Literal["neo4j", "neptune"] = "neo4j"
    neo4j: dict[str, Any] = Field(default_factory=dict)
    neptune: Optional[dict[str, Any]] = None
    constraints: dict[str, list[str]] = Field(default_factory=dict)

    model_config = SettingsConfigDict(extra="forbid")


def validate_config_schema(config_data: dict) -> bool:
    """Validate settings data against the Pydantic schema."""

    try:
        SettingsFileModel.model_validate(config_data)
    except ValidationError as exc:
        raise ValueError(str(exc)) from exc
    return True


class RuntimeSettings(BaseSettings):
    """Central runtime settings loaded from YAML and environment."""

    app: AppSettingsModel = Field(
        default_factory=AppSettingsModel,
        description="Library configuration",
    )
    backend: Literal["neo4j", "neptune"] = Field(
        default="neo4j",
        description="Which driver factory to use",
    )
    neo4j: Neo4jSettingsModel = Field(
        default_factory=Neo4jSettingsModel,
        description="Neo4j connection options",
    )
    neptune: Optional[NeptuneSettingsModel] = Field(
        default=None,
        description="Neptune connection options",
    )
    constraints: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Schema constraint statements keyed by node label",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_nested_delimiter="__", extra="ignore"
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # YAML values arrive as init kwargs; the environment must win over them.
        return env_settings, dotenv_settings, init_settings, file_secret_settings

    @property
    def connection(self) -> Union[Neo4jSettingsModel, NeptuneSettingsModel]:
        """Settings for the configured backend."""
        if self.backend == "neptune":
            return self.neptune or NeptuneSettingsModel()
        return self.neo4j


def load_runtime_settings(path: Union[str, Path, None] = None) -> RuntimeSettings:
    """
    Load runtime settings from a YAML file and environment variables.

    If the YAML file exists its contents are validated and used as defaults;
    environment variables take precedence.

    Args:
        path: Optional YAML path. Defaults to ``config/settings.yaml`` at the
            repository root.

    Returns:
        RuntimeSettings: The combined runtime settings.
    """

    yaml_path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    data: dict[str, Any] = {}
    if yaml_path.exists():
        with open(yaml_path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        validate_config_schema(data)
    return RuntimeSettings(**data)


runtime_settings = load_runtime_settings()

settings = runtime_settings
