"""
Pydantic v2 settings for the table markup generator.
Supports .env files, environment variables, and runtime validation of render defaults.
"""

from pathlib import Path
from typing import Dict, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tablemarkup.environment import Environment


ROOT_PATH = Path(__file__).parent.parent.parent

class AppSettings(BaseSettings):
    """Main application configuration."""
    model_config = SettingsConfigDict(env_prefix="TABLEMARKUP_APP_")

    log_level: str = Field(default="INFO", description="Logging level", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    root_path: Path = Field(default=ROOT_PATH, description="Root path of the application")


class ResourceSettings(BaseSettings):
    """Where client-side resources (locale files) are served from."""
    model_config = SettingsConfigDict(env_prefix="TABLEMARKUP_RESOURCES_")

    base_url            : str       = Field(default="/javax.faces.resource", description="Base URL resources are served under")
    library             : str       = Field(default="bsf",                   description="Resource library name appended as ?ln=")
    locale_path_pattern : str       = Field(default="jq/ui/i18n/dt/datatable-{lang}.json", description="Library relative path of a locale file")
    supported_languages : List[str] = Field(
        default=["de", "en", "es", "fr", "hu", "it", "nl", "pl", "pt", "ru"],
        description="Language codes a locale file exists for",
    )

    def resolve(self, path: str, library: str | None = None) -> str:
        """Build the request path of a library resource."""
        return f"{self.base_url.rstrip('/')}/{path}?ln={library or self.library}"


class TableDefaults(BaseSettings):
    """Defaults applied to every RenderSettings that does not override them."""
    model_config = SettingsConfigDict(env_prefix="TABLEMARKUP_TABLE_")

    page_length                  : int  = Field(default=10,                    description="Rows per page")
    page_length_menu             : str  = Field(default="[ 10, 25, 50, 100 ]", description="Page length menu literal")
    paginated                    : bool = Field(default=True,                  description="Enable paging")
    searching                    : bool = Field(default=True,                  description="Enable the global search box")
    info                         : bool = Field(default=True,                  description="Show the table information summary")
    multi_column_search_position : str  = Field(default="bottom",              description="Where the per-column search row goes")
    selection_mode               : str  = Field(default="multiple",            description="Default selection style")

    @field_validator("multi_column_search_position")
    @classmethod
    def validate_position(cls, v: str) -> str:
        if v.lower() not in ("top", "bottom", "both"):
            raise ValueError("multi_column_search_position must be one of 'top', 'bottom' or 'both'.")
        return v.lower()


class Settings(BaseSettings):
    """Complete application settings."""

    model_config = SettingsConfigDict(
        env_file=(ROOT_PATH / '.env'),
        env_file_encoding='utf-8',
        env_prefix="TABLEMARKUP_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    app       : AppSettings      = Field(default_factory=AppSettings)
    resources : ResourceSettings = Field(default_factory=ResourceSettings)
    table     : TableDefaults    = Field(default_factory=TableDefaults)
    env       : Environment      = Field(default_factory=Environment.from_os, description="Current application environment")


class _SettingsTesting(Settings):
    """Settings for testing environment."""

    model_config = SettingsConfigDict(
        env_file=(ROOT_PATH / '.env.testing'),
        env_file_encoding='utf-8',
        env_prefix="TABLEMARKUP_",
        env_nested_delimiter="__",
        extra="ignore",
    )
    env: Environment = Field(default_factory=lambda: Environment.TESTING, description="Current application environment")


# Global settings singleton
SETTINGS: Dict[Environment, Settings] = {}

def get_settings() -> Settings:
    """Retrieve the global settings singleton for the current environment.

    The environment file is chosen on first access per environment; later calls return the
    cached instance.

    Example:
        >>> from tablemarkup.environment import Environment
        >>> _ = Environment.TESTING.activate()
        >>> get_settings().table.page_length
        10
    """
    current_env = Environment.from_os()
    if SETTINGS.get(current_env, None) is None:
        if current_env is Environment.TESTING:
            SETTINGS[current_env] = _SettingsTesting()  # pyright: ignore
        else:
            SETTINGS[current_env] = Settings(_env_file=current_env.dotenv_path(ROOT_PATH))  # pyright: ignore
    return SETTINGS[current_env]


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment."""
    SETTINGS.clear()
