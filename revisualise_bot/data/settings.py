from pydantic import BaseModel, Field, SecretStr, AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class BotConfig(BaseModel):
    token: SecretStr
    support_email: str = "support@example.com"


class ApiUrls(BaseModel):
    google_api_key: SecretStr | None = None
    # --- OpenRouter Settings ---
    openrouter: AnyHttpUrl = "https://openrouter.ai/api/v1"
    openrouter_api_key: SecretStr | None = None


class GoogleConfig(BaseModel):
    """Vertex AI credentials, used when no plain Gemini API key is set."""
    project_id: str | None = None
    location: str = "global"
    service_account_creds_json: SecretStr | None = None


class GenerationConfig(BaseModel):
    client: str = "google"
    model: str = "gemini-2.5-flash-image"
    aspect_ratio: str = "1:1"
    temperature: float = 0.6


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    bot: BotConfig | None = None
    api_urls: ApiUrls = Field(default_factory=ApiUrls)
    google: GoogleConfig = Field(default_factory=GoogleConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)

    logging_level: int = 20


settings = Settings()
