from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str | None = None

    OPENAI_MODEL_REPLY: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE_REPLY: float = 0.5
    OPENAI_MAX_TOKENS_REPLY: int = 500
    OPENAI_TIMEOUT_SECONDS: float = 30.0

    LINE_CHANNEL_SECRET: str | None = None
    LINE_CHANNEL_ACCESS_TOKEN: str | None = None
    LINE_REPLY_ENDPOINT: str = "https://api.line.me/v2/bot/message/reply"
    LINE_REPLY_TIMEOUT_SECONDS: float = 10.0

    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    BUSINESS_NAME: str = "WashCar"
    BUSINESS_TIMEZONE: str = "Asia/Taipei"
    SYSTEM_PROMPT_SETTING_KEY: str = "GEMINI_SYSTEM_PROMPT"
    HISTORY_LIMIT: int = 6
    BOOKING_REQUIRE_STORE: bool = True

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    AUTO_REPLY_ENABLED: bool = True


settings = Settings()
