"""Application configuration via pydantic-settings.

Loads all settings from environment variables with sensible defaults.
A global `settings` singleton is available for import throughout the app.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Supabase
    SUPABASE_URL: str
    SUPABASE_KEY: str
    SUPABASE_TIMEOUT_SECONDS: int = 10

    # Tables
    USERS_TABLE: str = "users"
    DOCTORS_TABLE: str = "doctors"
    BECOME_DOCTOR_TABLE: str = "become_doctor_requests"

    # Doctor search
    SEARCH_DEFAULT_AMOUNT: int = 50
    SEARCH_MAX_AMOUNT: int = 200
    # False keeps experience / serviceExperience / rating ranges in one
    # shared OR group; True ANDs one OR group per category.
    STRICT_RANGE_GROUPS: bool = False

    # Become-doctor applications
    BECOME_DOCTOR_REQUEST_LIMIT: int = 3

    # CORS
    ALLOWED_ORIGINS: str = "*"

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()  # type: ignore[call-arg]
