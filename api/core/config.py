"""Application configuration using pydantic-settings."""

from functools import cached_property, lru_cache
from pathlib import Path
from typing import Self

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_BUNDLED_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Set by serverless-offline / local runs. Switches the browser launch
    # profile and writes a debug copy of each rendered PDF to disk.
    is_offline: bool = False

    aws_region: str = "us-east-1"
    # For offline runs against DynamoDB Local / LocalStack
    # Example: "http://localhost:8000"
    aws_endpoint_url: str = ""

    certificates_table: str = "users_certificate"
    certificates_bucket: str = "certificates-ignite-2022"
    artifact_extension: str = "pdf"

    # Defaults to https://<bucket>.s3.amazonaws.com when empty
    public_base_url: str = ""

    # Relative paths are resolved against the process working directory
    templates_dir: str = ""
    template_name: str = "certificate.html"
    medal_asset_name: str = "selo.png"

    local_debug_output_path: str = "./certificate.pdf"

    # Chromium binary for Lambda layers; Playwright's bundled browser otherwise
    chromium_executable_path: str = ""

    debug: bool = False
    enable_docs: bool = False

    @model_validator(mode="after")
    def validate_config(self) -> Self:
        if not self.certificates_table:
            raise ValueError("CERTIFICATES_TABLE must not be empty.")
        if not self.certificates_bucket:
            raise ValueError("CERTIFICATES_BUCKET must not be empty.")
        if not self.artifact_extension or self.artifact_extension.startswith("."):
            raise ValueError(
                "ARTIFACT_EXTENSION must be a bare extension such as 'pdf'."
            )
        return self

    @cached_property
    def public_bucket_base_url(self) -> str:
        """Base URL that stored artifacts are publicly served from."""
        if self.public_base_url:
            return self.public_base_url.rstrip("/")
        return f"https://{self.certificates_bucket}.s3.amazonaws.com"

    @cached_property
    def templates_dir_path(self) -> Path:
        """Defaults to the templates bundled with the api package."""
        if not self.templates_dir:
            return _BUNDLED_TEMPLATES_DIR
        path = Path(self.templates_dir)
        if not path.is_absolute():
            path = Path.cwd() / path
        return path


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this in tests to reset settings between test cases.
    After clearing, the next get_settings() call will create
    a fresh Settings instance with current environment variables.

    Example:
        def test_something(monkeypatch):
            monkeypatch.setenv("IS_OFFLINE", "true")
            clear_settings_cache()
            settings = get_settings()  # Fresh instance
    """
    get_settings.cache_clear()
