"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (SCOUTSEARCH_ prefix)
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_DATE_FORMATS = ["yyyy-MM-dd HH:mm:ss||yyyy-MM-dd"]


class ElasticsearchSettings(BaseModel):
    """Search engine connection and index naming configuration.

    ``index_read`` and ``index_write`` override the base names given to the
    engine constructor. They may also be spelled ``index-read`` and
    ``index-write`` in YAML files.
    """

    model_config = {"populate_by_name": True}

    backend: Literal["opensearch", "elasticsearch"] = Field(
        default="opensearch", description="Client library used to talk to the cluster"
    )
    hosts: list[str] = Field(default_factory=lambda: ["http://localhost:9200"], description="Cluster node URLs")
    username: str | None = Field(default=None, description="HTTP basic-auth username")
    password: str | None = Field(default=None, description="HTTP basic-auth password")
    api_key: str | None = Field(default=None, description="API key authentication")
    verify_certs: bool = Field(default=True, description="Verify TLS certificates")
    index_read: str | None = Field(
        default=None,
        validation_alias=AliasChoices("index_read", "index-read"),
        description="Base name of the indices queried by searches",
    )
    index_write: str | None = Field(
        default=None,
        validation_alias=AliasChoices("index_write", "index-write"),
        description="Base name of the indices written by bulk operations",
    )
    mapping_type: str | None = Field(
        default=None,
        description="Legacy mapping type (e.g. 'doc') the put-mapping body is nested under",
    )
    dynamic_date_formats: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DATE_FORMATS),
        description="Date formats detected in dynamically mapped string fields",
    )
    chunk_size: int = Field(default=500, ge=1, description="Models per bulk request when reindexing")
    extra: dict[str, Any] = Field(default_factory=dict, description="Additional client keyword arguments")

    @field_validator("hosts", mode="before")
    @classmethod
    def _parse_hosts(cls, v: Any) -> list[str]:
        """Parse hosts from JSON string (env var) or list."""
        if isinstance(v, str):
            import json

            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(h) for h in parsed]
            except (json.JSONDecodeError, TypeError):
                pass
            # Single host as plain string
            return [v] if v else []
        return list(v)


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root settings.

    Configuration is loaded from environment variables with the SCOUTSEARCH_ prefix.
    Nested settings use double underscores.

    Example:
        SCOUTSEARCH_ELASTICSEARCH__HOSTS='["http://es-1:9200", "http://es-2:9200"]'
        SCOUTSEARCH_ELASTICSEARCH__INDEX_READ=myapp_read_1
        SCOUTSEARCH_ELASTICSEARCH__INDEX_WRITE=myapp_write_1
    """

    model_config = {
        "env_prefix": "SCOUTSEARCH_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    elasticsearch: ElasticsearchSettings = Field(default_factory=ElasticsearchSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are used as defaults; environment variables
        still take precedence.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
