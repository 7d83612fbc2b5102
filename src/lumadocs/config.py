"""Viewer configuration loaded from environment variables."""
from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Viewer configuration loaded from environment variables.

    Attributes:
        host: Bind address for the API server.
        port: Port number for the API server.
        debug: Enable debug mode, console logs and API documentation.
        cors_origins_raw: Raw comma-separated CORS origins string.
        docs_root: Directory holding the manifest and markdown documents.
        manifest_file: Manifest filename, relative to docs_root.
        docs_base_url: Remote base URL to fetch documents from instead of docs_root.
        fetch_timeout: Seconds to wait for a remote document fetch.
        index_fetch_concurrency: Documents fetched in parallel while indexing.
        navigation_settle_ms: Delay between mounting a document and locating an anchor.
    """

    model_config = SettingsConfigDict(
        env_prefix="LUMADOCS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    cors_origins_raw: str = "http://localhost:5173"

    docs_root: str = "docs"
    manifest_file: str = "manifest.yaml"
    docs_base_url: str | None = None
    fetch_timeout: float = 10.0
    index_fetch_concurrency: int = 1
    navigation_settle_ms: int = 100

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string.

        Returns:
            List of allowed origin URLs.
        """
        return [
            origin.strip()
            for origin in self.cors_origins_raw.split(",")
            if origin.strip()
        ]
