"""Source configuration using pydantic-settings.

Values come from keyword arguments, ``GDOCS_*`` environment variables or a
``.env`` file. Credentials and folder ids have no defaults; call
:meth:`Settings.require` before doing anything that touches the network.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from gdocs_source.exceptions import ConfigurationError

DOCS_READONLY_SCOPE = "https://www.googleapis.com/auth/documents.readonly"
DRIVE_METADATA_READONLY_SCOPE = "https://www.googleapis.com/auth/drive.metadata.readonly"

DEFAULT_FIELDS_MAPPER: dict[str, str] = {"createdTime": "date", "name": "title"}

ON_ERROR_POLICIES = ("abort", "skip")


class Settings(BaseSettings):
    """Options for one run of the Google Docs source.

    Required:
    - GDOCS_API_KEY: Google API key sent with Docs requests
    - GDOCS_CLIENT_ID / GDOCS_CLIENT_SECRET: OAuth client credentials
    - GDOCS_FOLDERS_IDS: Drive folder ids to walk (comma-separated)
    """

    model_config = SettingsConfigDict(
        env_prefix="GDOCS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials
    api_key: str = ""
    client_id: str = ""
    client_secret: str = ""
    access_type: str = "offline"
    redirect_uris: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost"]
    )
    scopes: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [DOCS_READONLY_SCOPE, DRIVE_METADATA_READONLY_SCOPE]
    )
    token_path: str = "google-docs-token.json"

    # Listing
    folders_ids: Annotated[list[str], NoDecode] = Field(default_factory=list)
    num_nodes: int = 10
    drive_fields: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["createdTime"]
    )

    # Node assembly
    type_name: str = "GoogleDocs"
    fields_mapper: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_FIELDS_MAPPER)
    )
    fields_default: dict[str, Any] = Field(default_factory=lambda: {"draft": False})

    # Run behaviour
    concurrency: int = 4
    on_error: str = "abort"
    log_level: str = "INFO"
    json_logs: bool = False

    @field_validator("folders_ids", "redirect_uris", "scopes", "drive_fields", mode="before")
    @classmethod
    def split_comma_separated(cls, v: Any) -> Any:
        """Accept comma-separated strings for list options."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("num_nodes", "concurrency")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate page size and concurrency are usable."""
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator("on_error")
    @classmethod
    def validate_on_error(cls, v: str) -> str:
        """Validate the per-document failure policy."""
        v_lower = v.lower()
        if v_lower not in ON_ERROR_POLICIES:
            raise ValueError(f"on_error must be one of: {ON_ERROR_POLICIES}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known value."""
        allowed = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of: {allowed}")
        return v_upper

    def missing_required(self) -> list[str]:
        """Return the names of required options that are not set."""
        missing = []
        if not self.api_key:
            missing.append("API key")
        if not self.client_id:
            missing.append("client id")
        if not self.client_secret:
            missing.append("client secret")
        if not self.folders_ids:
            missing.append("folders ids")
        return missing

    def require(self) -> None:
        """Raise ConfigurationError listing every missing required option."""
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(missing)
