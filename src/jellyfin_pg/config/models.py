"""Pydantic models for provider configuration and connection parameters."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.engine import URL

DEFAULT_DRIVERNAME = "postgresql+psycopg"


# ============================================================================
# Host Configuration Models
# ============================================================================


class CustomDatabaseOption(BaseModel):
    """A single key/value pair from the host's custom option bag."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    key: str
    value: str


class CustomDatabaseOptions(BaseModel):
    """Provider-specific options supplied by the host."""

    plugin_name: str = ""
    options: list[CustomDatabaseOption] = Field(default_factory=list)

    @field_validator("options", mode="before")
    @classmethod
    def _table_to_pairs(cls, value):
        # TOML tables arrive as dicts; keep file order as lookup order
        if isinstance(value, dict):
            return [{"key": k, "value": v} for k, v in value.items()]
        return value


class DatabaseConfigurationOptions(BaseModel):
    """Database section of the host configuration."""

    database_type: str = "Jellyfin-PostgreSQL"
    custom_provider_options: CustomDatabaseOptions | None = None


class ApplicationPaths(BaseModel):
    """Host directories the provider reads from and writes to."""

    data_path: Path


class ProviderConfig(BaseModel):
    """Complete provider configuration from jellyfin-pg.toml."""

    database: DatabaseConfigurationOptions = Field(
        default_factory=DatabaseConfigurationOptions
    )
    paths: ApplicationPaths


# ============================================================================
# Connection Info
# ============================================================================


class ConnectionInfo(BaseModel):
    """Resolved PostgreSQL connection parameters.

    Every field has a default, so an instance built from an empty option
    bag still points at ``jellyfin@localhost:5432/jellyfin``.
    """

    model_config = ConfigDict(frozen=True)

    host: str = "localhost"
    port: int = 5432
    database: str = "jellyfin"
    username: str = "jellyfin"
    password: str = "jellyfin"

    def url(self, drivername: str = DEFAULT_DRIVERNAME) -> URL:
        """Build a SQLAlchemy URL for these parameters.

        Args:
            drivername: SQLAlchemy dialect+driver name.

        Returns:
            ``URL`` carrying host, port, database and credentials.

        Example:
            >>> ConnectionInfo(host="db").url().render_as_string(hide_password=True)
            'postgresql+psycopg://jellyfin:***@db:5432/jellyfin'
        """
        return URL.create(
            drivername,
            username=self.username,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )

    def describe(self) -> str:
        """Connection string with the password masked, safe for logs."""
        return self.url().render_as_string(hide_password=True)
