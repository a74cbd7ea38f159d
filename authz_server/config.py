import logging

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    schema_path: str = Field(default="schema.zed", description="Path to the Zed schema file")
    relationships_path: str = Field(
        default="relationships.yaml",
        description="Path to the YAML file with the initial relationships",
    )

    # Sentinel check performed before every resource specific check
    global_admin_resource: str = "global:main"
    global_admin_permission: str = "full_access"

    service_name: str = "rebac-authorization-server"
    cors_origins: list[str] = ["*"]

    host: str = "0.0.0.0"
    port: int = Field(gt=0, default=8082)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix='authz_')


@lru_cache()
def get_settings():
    return Settings()
