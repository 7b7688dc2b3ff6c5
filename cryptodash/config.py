from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    # CORS allowed origins (add your frontend URLs here)
    allowed_origins: List[str] = [
        "http://localhost:5173",        # Vite dev
        "http://localhost:3000",        # local frontend
    ]

    # CoinGecko public API
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    coingecko_api_key: str | None = None
    http_timeout: float = 15.0
    user_agent: str = "cryptodash/1.0"

    log_level: str = "INFO"

    # Load .env file automatically if present
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )

# Create a single settings instance
settings = Settings()
