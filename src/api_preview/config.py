"""Rendering options shared by the CLI and the library entry point."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BANNER_TITLE = "API Documentation Preview"
DEFAULT_DOCS_URL = "https://apidocs.example.com"
DEFAULT_API_BASE_URL = "https://api.example.com"


class PreviewConfig(BaseModel):
    """Options controlling page chrome and endpoint rendering."""

    model_config = ConfigDict(frozen=True)

    banner_title: str = DEFAULT_BANNER_TITLE
    docs_url: str = DEFAULT_DOCS_URL
    api_base_url: str = DEFAULT_API_BASE_URL
    workers: int = Field(default=1, ge=1)  # >1 renders endpoints in a thread pool
