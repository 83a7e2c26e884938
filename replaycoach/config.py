from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="REPLAYCOACH_")

    app_name: str = "replaycoach"

    api_base_url: str = "http://localhost:8080/api/v1"
    request_timeout: float = 30.0

    # Bearer token for CLI use; the library itself takes tokens from Session
    api_token: str = ""

    default_page_size: int = 20
    default_progress_days: int = 14

    log_level: str = "INFO"


settings = Settings()


# =============================================================================
# BACKEND PAGINATION LIMITS
# =============================================================================

# The backend silently falls back to its default page size outside this range
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100

# Multipart field name the upload endpoint reads the replay file from
UPLOAD_FIELD_NAME = "replay"
