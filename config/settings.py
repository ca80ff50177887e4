from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Remote content backend (custom REST namespace)
    BACKEND_BASE_URL: str = "https://admin.viratranslate.ir/wp-json/custom/v1"
    # JWT auth + current user endpoints live under the API root
    BACKEND_AUTH_URL: str = "https://admin.viratranslate.ir/wp-json"
    BACKEND_TIMEOUT_SECONDS: float = 15.0

    # Page size used when reloading the full order list
    ORDERS_PAGE_SIZE: int = 100

    # Recorded as changed_by when the caller does not name a staff member
    DEFAULT_CHANGED_BY: str = "user"

    # App
    APP_NAME: str = "Translation Agency Dashboard"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev
    LOG_LEVEL: str = "INFO"


settings = Settings()
