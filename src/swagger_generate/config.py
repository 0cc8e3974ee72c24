"""Generator settings.

Values are resolved in this order: explicit overrides (CLI options), the
manifest's ``app:`` block, environment variables, then the defaults below.
"""

import os

from pydantic import BaseModel

DEFAULT_SERVER_URL = "http://localhost"


class Settings(BaseModel):
    """Document metadata and route filtering options for one generation run."""

    title: str = "Documentation"
    version: str = "1.0.0"
    server_url: str = DEFAULT_SERVER_URL
    server_description: str = "Base API URL"
    controller_namespace: str = "App\\Http\\Controllers"
    api_middleware: str = "api"
    auth_marker: str = "auth"
    yaml_filename: str = "api-docs.yaml"
    html_filename: str = "docs.html"

    @property
    def docs_url(self) -> str:
        return f"{self.server_url.rstrip('/')}/{self.html_filename}"


def load_settings(manifest_app: dict | None = None, **overrides) -> Settings:
    """Build Settings from environment, manifest ``app:`` values and overrides.

    ``None`` overrides are ignored so unset CLI options fall through.
    """
    values: dict = {}

    env_url = os.getenv("APP_URL")
    if env_url:
        values["server_url"] = env_url

    for key, value in (manifest_app or {}).items():
        if key == "url":
            key = "server_url"
        # YAML reads `version: 1.0` as a float
        if isinstance(value, (int, float)):
            value = str(value)
        values[key] = value

    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)
