"""Runtime configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Directory settings.

    Attributes
    ----------
    database_url : str
        SQLAlchemy async database URL.
    echo_sql : bool
        Whether the default engine logs emitted SQL.
    owner_team_name : str
        Name of the team created alongside every organization.
    """

    model_config = SettingsConfigDict(env_prefix="ORG_DIRECTORY_", extra="ignore")

    database_url: str = "sqlite+aiosqlite:///./org_directory.db"
    echo_sql: bool = False
    owner_team_name: str = "Owners"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings.

    Returns
    -------
    Settings
        Cached settings instance.
    """
    return Settings()
