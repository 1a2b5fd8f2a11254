from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./recipebook.db"
    auto_create_tables: bool = True

    # Static files (recipe images live under <static_root>/images/recipes)
    static_root: str = "./static"
    image_url_prefix: str = "/images/recipes"

    # Translation
    translation_provider: str = "azure"  # "azure", "gemini" or "mock"
    azure_translator_key: Optional[str] = None
    azure_translator_region: Optional[str] = None
    azure_translator_endpoint: str = "https://api.cognitive.microsofttranslator.com"
    gemini_api_key: Optional[str] = None
    gemini_text_model: str = "gemini-2.5-flash"
    translation_timeout_seconds: float = 10.0

    # Admin pages (HTTP Basic). No password means admin pages are disabled.
    admin_username: str = "admin"
    admin_password: Optional[str] = None

    # CORS
    cors_allow_all: bool = True
    cors_assistant_origins: list[str] = [
        "https://chat.openai.com",
        "https://chatgpt.com",
    ]
    cors_extra_origins: list[str] = []

    # Rate limiting (per-IP)
    rate_limit_default: str = "100/minute"
    rate_limit_writes: str = "30/minute"

    dev_routes_enabled: bool = False


settings = Settings()
