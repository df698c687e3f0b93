"""Application configuration."""
from functools import lru_cache

from pydantic_settings import BaseSettings

from traveldesk.errors import ConfigurationError

DEFAULT_CORS_ORIGINS = ",".join(
    [
        "http://localhost:8000",
        "http://localhost:3000",
        "http://localhost:5501",
        "http://127.0.0.1:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5501",
        "https://chrome-built-in-ai-challenge-2025.vercel.app",
    ]
)


class Settings(BaseSettings):
    """App settings from env."""

    # Canned responses instead of the grounded backend
    mock_mode: bool = False

    # Vertex AI location of the grounded search model; required unless mock_mode
    gcp_project: str = ""
    gcp_location: str = ""
    model_grounded_search: str = "gemini-2.5-flash"

    # Conversation summary / staff suggestions; rule-based fallback when empty
    openai_api_key: str = ""
    model_conversation: str = "gpt-4o-mini"

    cors_origins: str = DEFAULT_CORS_ORIGINS

    image_fetch_timeout_seconds: float = 8.0
    image_fetch_max_workers: int = 6

    service_name: str = "travel-desk-api"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def require_backend(self) -> None:
        """Fail fast when the grounded backend cannot be reached outside mock mode."""
        if self.mock_mode:
            return
        missing = [
            name
            for name, value in (("GCP_PROJECT", self.gcp_project), ("GCP_LOCATION", self.gcp_location))
            if not value.strip()
        ]
        if missing:
            raise ConfigurationError(
                f"{' and '.join(missing)} required when MOCK_MODE is off "
                "(set them or enable MOCK_MODE=true for demos)"
            )


@lru_cache
def get_settings() -> Settings:
    return Settings()
