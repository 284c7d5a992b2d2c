import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    default_recipe_title: str = Field("Untitled Recipe", alias="RECIPE_DEFAULT_TITLE")
    # JSON-LD nesting below this depth is not searched for a Recipe node
    json_ld_max_depth: int = Field(16, alias="RECIPE_JSON_LD_MAX_DEPTH")
    log_level: str = Field("INFO", alias="RECIPE_LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    try:
        settings = Settings()
    except PermissionError:
        logger.warning("Unable to read .env; continuing with environment variables only")
        settings = Settings(_env_file=None)
    return settings


def configure_logging() -> None:
    """Configure root logging for scripts; library modules only create loggers."""
    level = getattr(logging, get_settings().log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
